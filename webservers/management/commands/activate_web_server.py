"""
Django management command to activate a web server for project scopes.

Undeploys the given web app scopes from their current web server,
activates the new web server and deploys the scopes to it.

Example:
    manage.py activate_web_server -wpn "existingProjectName" -was "WEBEDIT" \
        -wsn "FirstSpirit Jetty" -fwa
"""

import asyncio
import logging

from django.core.management.base import BaseCommand, CommandError

from core.domain.exceptions import DomainException
from webservers.application.commands.activate_web_server import ActivateWebServerCommand
from webservers.application.handlers.activate_web_server_handler import ActivateWebServerHandler
from webservers.infrastructure.connection_factory import create_connection

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to activate a web server for a number of a project's web scopes."""

    help = "Activates a web server for a number of a project's web scopes"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "-wpn",
            "--project-name",
            dest="project_name",
            help="The name of the project for which the web server activation will be performed",
        )
        parser.add_argument(
            "-wsn",
            "--server-name",
            dest="server_name",
            help="The name of the web server which should be activated",
        )
        parser.add_argument(
            "-was",
            "--scopes",
            dest="web_app_scopes",
            help=(
                "Comma-separated web app scopes of the project: PREVIEW, STAGING, WEBEDIT. "
                "For global web apps, use 'global(WebAppId)'"
            ),
        )
        parser.add_argument(
            "-fwa",
            "--force",
            dest="force_activation",
            action="store_true",
            help="Force web server activation if there already is an active web server",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        command = ActivateWebServerCommand(
            project_name=options["project_name"],
            server_name=options["server_name"],
            web_app_scopes=options["web_app_scopes"],
            force_activation=options["force_activation"],
        )
        handler = ActivateWebServerHandler(connection=create_connection())

        try:
            response = asyncio.run(handler.handle(command))
        except DomainException as e:
            raise CommandError(e.message) from e

        for scope in response.scopes:
            line = f"  - {scope.scope}: {scope.outcome}"
            if scope.failure:
                line += f" ({scope.failure})"
            self.stdout.write(line)
            for error in scope.recovery_errors:
                # pylint: disable=no-member
                self.stdout.write(self.style.WARNING(f"      recovery error: {error}"))

        if not response.success or response.has_failures:
            raise CommandError(response.message)

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(response.message))
