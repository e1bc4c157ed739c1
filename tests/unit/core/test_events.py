"""
Unit tests for domain events, the in-memory event bus and the log context.
"""
import logging

import pytest

from core.domain.events import EventHandler
from core.infrastructure.activation_context import bind_activation, get_current_activation
from core.infrastructure.event_handlers import AuditLogEventHandler
from core.infrastructure.events import InMemoryEventBus
from webservers.domain.events import WebServerActivated, WebServerRecoveryPerformed
from WebServerActivationService.settings.logging import ActivationJsonFormatter


class CollectingHandler(EventHandler):
    def __init__(self):
        self.handled = []

    async def handle(self, event):
        self.handled.append(event)


class FailingHandler(EventHandler):
    async def handle(self, event):
        raise RuntimeError("handler down")


def _activated():
    return WebServerActivated(
        project_name="Demo", scope_name="WEBEDIT", server_name="JettyB", previous_server="JettyA"
    )


class TestDomainEvents:
    """Tests for web server domain events."""

    def test_to_dict(self):
        """Test event serialization contains metadata and payload."""
        data = _activated().to_dict()

        assert data["event_type"] == "WebServerActivated"
        assert data["aggregate_id"] == "Demo:WEBEDIT"
        assert data["server_name"] == "JettyB"
        assert data["previous_server"] == "JettyA"
        assert "event_id" in data and "occurred_at" in data


@pytest.mark.asyncio
class TestInMemoryEventBus:
    """Tests for InMemoryEventBus."""

    async def test_publish_to_subscribers(self):
        """Test handlers receive events of their type only."""
        bus = InMemoryEventBus()
        handler = CollectingHandler()
        bus.subscribe(WebServerActivated, handler)

        event = _activated()
        await bus.publish(event)
        await bus.publish(
            WebServerRecoveryPerformed(
                project_name="Demo",
                scope_name="WEBEDIT",
                failed_server="JettyB",
                restored_server="JettyA",
                complete=True,
            )
        )

        assert handler.handled == [event]

    async def test_failing_handler_does_not_reach_publisher(self):
        """Test handler errors are contained."""
        bus = InMemoryEventBus()
        collecting = CollectingHandler()
        bus.subscribe(WebServerActivated, FailingHandler())
        bus.subscribe(WebServerActivated, collecting)

        await bus.publish(_activated())

        assert len(collecting.handled) == 1

    async def test_audit_log_handler(self, caplog):
        """Test audit handler logs incomplete recoveries as warnings."""
        caplog.set_level(logging.INFO, logger="core.infrastructure.event_handlers")

        await AuditLogEventHandler().handle(
            WebServerRecoveryPerformed(
                project_name="Demo",
                scope_name="WEBEDIT",
                failed_server="JettyB",
                restored_server="JettyA",
                complete=False,
                errors=("reassign: locked",),
            )
        )

        (record,) = caplog.records
        assert record.levelno == logging.WARNING
        assert record.aggregate_id == "Demo:WEBEDIT"


class TestActivationContext:
    """Tests for the activation log context."""

    def test_bind_and_reset(self):
        """Test the context is only bound inside the block."""
        assert get_current_activation() is None

        with bind_activation("Demo", "WEBEDIT", "JettyB") as context:
            assert get_current_activation() == context

        assert get_current_activation() is None

    def test_json_formatter_adds_context(self):
        """Test log records carry the current activation."""
        formatter = ActivationJsonFormatter("%(levelname)s %(message)s")
        record = logging.LogRecord("webservers", logging.INFO, __file__, 1, "deploying", None, None)

        with bind_activation("Demo", "WEBEDIT", "JettyB"):
            output = formatter.format(record)

        assert '"project": "Demo"' in output
        assert '"scope": "WEBEDIT"' in output
        assert '"web_server": "JettyB"' in output
