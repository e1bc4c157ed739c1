"""
Integration tests for the activate_web_server management command.
"""
from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from webservers.infrastructure.in_memory import InMemoryConnection, InMemoryServer


@pytest.fixture
def remote_server(monkeypatch):
    """Fixture for the server the command connects to."""
    server = InMemoryServer()
    server.add_project("TestProject", {"WEBEDIT": "JettyA"})
    monkeypatch.setattr(
        "webservers.management.commands.activate_web_server.create_connection",
        lambda: InMemoryConnection(server),
    )
    return server


class TestActivateWebServerCommand:
    """Tests for the management command."""

    def test_activates_web_server(self, remote_server):
        """Test forced activation moves WEBEDIT to the new web server."""
        out = StringIO()

        call_command(
            "activate_web_server",
            "-wpn", "TestProject",
            "-wsn", "JettyB",
            "-was", "WEBEDIT",
            "-fwa",
            stdout=out,
        )

        assert "WEBEDIT: migrated" in out.getvalue()
        assert remote_server.projects["TestProject"].saved_web_servers["WEBEDIT"] == "JettyB"

    def test_skipped_without_force(self, remote_server):
        """Test activation without force keeps the active web server."""
        out = StringIO()

        call_command(
            "activate_web_server",
            project_name="TestProject",
            server_name="JettyB",
            web_app_scopes="WEBEDIT",
            stdout=out,
        )

        assert "WEBEDIT: skipped" in out.getvalue()
        assert remote_server.projects["TestProject"].saved_web_servers["WEBEDIT"] == "JettyA"

    def test_missing_parameter(self, remote_server):
        """Test a missing parameter is reported as command error."""
        with pytest.raises(CommandError, match="Missing parameter for web app scopes"):
            call_command("activate_web_server", project_name="TestProject", server_name="JettyB")

    def test_unknown_project_fails(self, remote_server):
        """Test failed preconditions are reported as command error."""
        with pytest.raises(CommandError, match="Web server activation failed."):
            call_command(
                "activate_web_server",
                project_name="Unknown",
                server_name="JettyB",
                web_app_scopes="WEBEDIT",
            )

    def test_recovered_scope_fails(self, remote_server):
        """Test a rolled back scope is reported as command error."""
        remote_server.agent.failing_servers.add("JettyB")
        out = StringIO()

        with pytest.raises(CommandError, match="1 failed scope"):
            call_command(
                "activate_web_server",
                project_name="TestProject",
                server_name="JettyB",
                web_app_scopes="WEBEDIT",
                force_activation=True,
                stdout=out,
            )

        assert "WEBEDIT: recovered" in out.getvalue()
        assert remote_server.projects["TestProject"].saved_web_servers["WEBEDIT"] == "JettyA"

    def test_unreadable_scope_fails(self, remote_server):
        """Test a failing remote read is reported per scope, not as a crash."""
        project = remote_server.projects["TestProject"]

        async def get_active_web_server(scope_name):
            raise RuntimeError("remote read failed")

        project.get_active_web_server = get_active_web_server
        out = StringIO()

        with pytest.raises(CommandError, match="1 failed scope"):
            call_command(
                "activate_web_server",
                project_name="TestProject",
                server_name="JettyB",
                web_app_scopes="WEBEDIT",
                stdout=out,
            )

        assert "WEBEDIT: failed" in out.getvalue()
        assert "remote read failed" in out.getvalue()


def test_connection_factory_from_settings(settings):
    """Test the connection factory configured in settings is used."""
    from webservers.infrastructure.connection_factory import create_connection

    settings.WEB_SERVER_ACTIVATION = {
        "CONNECTION_FACTORY": "webservers.infrastructure.in_memory.create_in_memory_connection",
        "CONNECTION_OPTIONS": {"projects": {"Demo": {"PREVIEW": "JettyA"}}},
    }

    connection = create_connection()

    assert isinstance(connection, InMemoryConnection)
    assert connection.server.projects["Demo"].saved_web_servers == {"PREVIEW": "JettyA"}


def test_connection_factory_not_configured(settings):
    """Test a missing factory is a configuration error."""
    from django.core.exceptions import ImproperlyConfigured

    from webservers.infrastructure.connection_factory import create_connection

    settings.WEB_SERVER_ACTIVATION = {}

    with pytest.raises(ImproperlyConfigured):
        create_connection()
