"""
Web server activation domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

import logging
from typing import Optional

from webservers.domain.activation_request import ActivationRequest
from webservers.ports.connection import Connection

logger = logging.getLogger(__name__)


class WebServerActivationPolicy:
    """Decides whether the active web server of a scope may be replaced."""

    @staticmethod
    def should_activate_web_server(
        active_web_server: Optional[str],
        server_name: str,
        force_activation: bool,
        scope_name: str = "",
        project_name: str = "",
    ) -> bool:
        """
        Decide whether a scope needs the target web server activated.

        Args:
            active_web_server: Currently active web server of the scope
            server_name: Web server that should become active
            force_activation: Whether an existing assignment may be overwritten
            scope_name: Scope name, for logging only
            project_name: Project name, for logging only

        Returns:
            True if the scope should be migrated, False to skip it
        """
        if not active_web_server:
            logger.info("Could not find an activated web server for scope %s.", scope_name)
            return True
        if active_web_server == server_name:
            logger.info(
                "'%s' is already the activated web server for scope %s.", server_name, scope_name
            )
            return False
        if not force_activation:
            logger.info(
                "'%s' already has an activated web server for scope %s ('%s'). "
                "Enable 'force activation' to overwrite the currently active web server.",
                project_name,
                scope_name,
                active_web_server,
            )
            return False
        return True


class ActivationPreconditions:
    """Checks the remote server state before any scope is touched."""

    @staticmethod
    async def are_fulfilled(connection: Optional[Connection], request: ActivationRequest) -> bool:
        """
        Check activation preconditions in order, stopping at the first failure.

        Args:
            connection: Established connection to the remote server
            request: Activation request

        Returns:
            True if the activation may proceed
        """
        if connection is None or not await connection.is_connected():
            logger.error("Please provide a connected connection.")
            return False

        projects = await connection.get_projects()
        if not projects:
            logger.error("Could not find any projects on the server.")
            return False

        if await connection.get_project_by_name(request.project_name) is None:
            logger.error("Could not find project with name '%s' on the server.", request.project_name)
            return False

        if any(scope is None for scope in request.scopes):
            logger.error("Found null scope in scopes. All scopes must not be null.")
            return False

        return True
