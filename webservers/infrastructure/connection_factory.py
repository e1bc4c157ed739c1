"""
Connection factory.

Builds the Connection adapter configured in
settings.WEB_SERVER_ACTIVATION["CONNECTION_FACTORY"].
"""

import logging

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from webservers.ports.connection import Connection

logger = logging.getLogger(__name__)


def create_connection() -> Connection:
    """
    Create a new, not yet connected, connection to the remote server.

    Returns:
        Connection built by the configured factory

    Raises:
        ImproperlyConfigured: If no factory is configured or it cannot be imported
    """
    config = getattr(settings, "WEB_SERVER_ACTIVATION", {})
    factory_path = config.get("CONNECTION_FACTORY")
    if not factory_path:
        raise ImproperlyConfigured("WEB_SERVER_ACTIVATION['CONNECTION_FACTORY'] is not set")

    try:
        factory = import_string(factory_path)
    except ImportError as e:
        raise ImproperlyConfigured(f"Cannot import connection factory '{factory_path}': {e}") from e

    connection = factory(**config.get("CONNECTION_OPTIONS", {}))
    logger.debug("Created connection using %s", factory_path)
    return connection
