"""
Test settings for WebServerActivationService.
"""

from .base import *  # noqa: F403, F401
from .logging import get_logging_config

DEBUG = False

WEB_SERVER_ACTIVATION = {
    "CONNECTION_FACTORY": "webservers.infrastructure.in_memory.create_in_memory_connection",
    "CONNECTION_OPTIONS": {
        "projects": {
            "TestProject": {"WEBEDIT": "JettyA"},
        },
    },
}

LOGGING = get_logging_config("test")
