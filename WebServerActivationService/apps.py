"""
App configuration for Web Server Activation Service.
"""

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class WebServerActivationServiceConfig(AppConfig):
    """App configuration for WebServerActivationService."""

    name = "WebServerActivationService"
    verbose_name = "Web Server Activation Service"

    def ready(self):
        """Called when Django starts."""
        self.register_event_handlers()

    def register_event_handlers(self):
        """Register event handlers after apps are ready."""
        try:
            from core.infrastructure.event_handlers import register_event_handlers as register

            register()
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning("Failed to register event handlers: %s", e)
