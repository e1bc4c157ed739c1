"""
Production settings for WebServerActivationService.
"""

import json
import os

from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa: F403, F401

DEBUG = False

# Secret key from environment
SECRET_KEY = os.environ.get("SECRET_KEY", SECRET_KEY)  # noqa: F405

_connection_factory = os.environ.get("WEB_SERVER_CONNECTION_FACTORY")
if not _connection_factory:
    raise ImproperlyConfigured("WEB_SERVER_CONNECTION_FACTORY must be set in production")

WEB_SERVER_ACTIVATION = {
    "CONNECTION_FACTORY": _connection_factory,
    # JSON object passed to the factory as keyword arguments
    "CONNECTION_OPTIONS": json.loads(os.environ.get("WEB_SERVER_CONNECTION_OPTIONS", "{}")),
}

# Logging in production
if os.environ.get("LOG_FILE"):
    LOGGING["handlers"]["file"] = {  # noqa: F405
        "class": "logging.handlers.RotatingFileHandler",
        "filename": os.environ["LOG_FILE"],
        "maxBytes": 1024 * 1024 * 10,  # 10 MB
        "backupCount": 10,
        "formatter": "json",
    }
    LOGGING["root"]["handlers"].append("file")  # noqa: F405
