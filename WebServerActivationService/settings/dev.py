"""
Development settings for WebServerActivationService.
"""

from .base import *  # noqa: F403, F401
from .logging import get_logging_config

DEBUG = True

# In-memory server seeded with a demo project; override the factory with
# WEB_SERVER_CONNECTION_FACTORY to talk to a real server.
import os

WEB_SERVER_ACTIVATION = {
    "CONNECTION_FACTORY": os.environ.get(
        "WEB_SERVER_CONNECTION_FACTORY",
        "webservers.infrastructure.in_memory.create_in_memory_connection",
    ),
    "CONNECTION_OPTIONS": {
        "projects": {
            os.environ.get("DEMO_PROJECT_NAME", "Demo"): {
                "PREVIEW": "FirstSpirit Jetty",
                "WEBEDIT": "FirstSpirit Jetty",
            },
        },
    },
}

LOGGING = get_logging_config("development")
