"""
ActivateWebServerHandler.

Handler for activating a web server for project scopes.
"""

import logging
from typing import Optional

from core.domain.exceptions import InvalidActivationParameterError
from webservers.application.commands.activate_web_server import ActivateWebServerCommand
from webservers.application.dto.activation_dto import ActivationResponseDTO
from webservers.application.services.web_server_activator import WebServerActivator
from webservers.domain.activation_request import ActivationRequest
from webservers.domain.web_app_identifier import parse_web_app_scopes
from webservers.ports.connection import Connection

logger = logging.getLogger(__name__)


class ActivateWebServerHandler:
    """Handler for ActivateWebServerCommand."""

    def __init__(self, connection: Connection, activator: Optional[WebServerActivator] = None):
        """Initialize handler with a not yet connected connection."""
        self.connection = connection
        self.activator = activator or WebServerActivator()

    async def handle(self, command: ActivateWebServerCommand) -> ActivationResponseDTO:
        """
        Handle activate web server command.

        Connects for the duration of the activation and always disconnects.

        Args:
            command: ActivateWebServerCommand

        Returns:
            ActivationResponseDTO with per-scope outcomes

        Raises:
            InvalidActivationParameterError: If a parameter is missing or
                the scopes cannot be parsed
        """
        request = self.build_request(command)

        async with self.connection as connection:
            result = await self.activator.activate_web_server(connection, request)

        response = ActivationResponseDTO.from_result(
            result, request.project_name, request.server_name
        )
        logger.info(response.message)
        return response

    @staticmethod
    def build_request(command: ActivateWebServerCommand) -> ActivationRequest:
        """
        Validate command parameters and build the activation request.

        Raises:
            InvalidActivationParameterError: If a parameter is missing or invalid
        """
        if not command.project_name:
            raise InvalidActivationParameterError("Missing parameter for project name")
        if not command.server_name:
            raise InvalidActivationParameterError("Missing parameter for web server name")
        if not command.web_app_scopes:
            raise InvalidActivationParameterError("Missing parameter for web app scopes")

        try:
            scopes = parse_web_app_scopes(command.web_app_scopes)
        except ValueError as e:
            raise InvalidActivationParameterError(str(e)) from e

        return (
            ActivationRequest.builder()
            .with_force_activation(command.force_activation)
            .at_project_name(command.project_name)
            .with_server_name(command.server_name)
            .for_scopes(scopes)
            .build()
        )
