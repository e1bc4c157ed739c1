"""
Base Django settings for WebServerActivationService.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

SECRET_KEY = os.environ.get("SECRET_KEY", "django-insecure-web-server-activation-local-key")

DEBUG = False

ALLOWED_HOSTS = []

# Application definition
INSTALLED_APPS = [
    "WebServerActivationService.apps.WebServerActivationServiceConfig",
    "core",
    "webservers",
]

# The service keeps no state of its own
DATABASES = {}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Web server activation
# CONNECTION_FACTORY is called with CONNECTION_OPTIONS as keyword arguments
# and must return a webservers.ports.connection.Connection.
WEB_SERVER_ACTIVATION = {
    "CONNECTION_FACTORY": "webservers.infrastructure.in_memory.create_in_memory_connection",
    "CONNECTION_OPTIONS": {},
}

# Observability
LOGGING = get_logging_config(os.environ.get("ENVIRONMENT", "production"))
