"""
Pytest configuration and shared fixtures.
"""

import asyncio
from typing import List

import pytest

from core.domain.events import DomainEvent, EventBus, EventHandler
from webservers.application.services.web_server_activator import WebServerActivator
from webservers.domain.activation_request import ActivationRequest
from webservers.domain.web_app_identifier import WEBEDIT
from webservers.infrastructure.in_memory import InMemoryConnection, InMemoryServer

PROJECT_NAME = "TestProject"


class RecordingEventBus(EventBus):
    """Event bus that keeps published events for assertions."""

    def __init__(self):
        self.events: List[DomainEvent] = []

    async def publish(self, event: DomainEvent) -> None:
        self.events.append(event)

    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        pass

    def of_type(self, event_type: type) -> List[DomainEvent]:
        return [event for event in self.events if isinstance(event, event_type)]


@pytest.fixture
def server():
    """Fixture for an in-memory server without projects."""
    return InMemoryServer()


@pytest.fixture
def project(server):
    """Fixture for a project without any active web server."""
    return server.add_project(PROJECT_NAME)


@pytest.fixture
def agent(server):
    """Fixture for the module admin agent of the server."""
    return server.agent


@pytest.fixture
def connection(server, project):
    """Fixture for an established connection to the server."""
    connection = InMemoryConnection(server)
    asyncio.run(connection.connect())
    return connection


@pytest.fixture
def event_recorder():
    """Fixture for a recording event bus."""
    return RecordingEventBus()


@pytest.fixture
def activator(event_recorder):
    """Fixture for a WebServerActivator publishing to the recording bus."""
    return WebServerActivator(event_bus=event_recorder)


@pytest.fixture
def make_request():
    """Fixture for building activation requests."""

    def _make_request(server_name="JettyA", scopes=(WEBEDIT,), force=False, project_name=PROJECT_NAME):
        return (
            ActivationRequest.builder()
            .at_project_name(project_name)
            .with_server_name(server_name)
            .for_scopes(scopes)
            .with_force_activation(force)
            .build()
        )

    return _make_request
