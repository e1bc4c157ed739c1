"""
Logging configuration for structured JSON logging.

Log records emitted during a scope migration carry the project, scope
and target web server of that migration.
"""

import sys

from pythonjsonlogger import jsonlogger

from core.infrastructure.activation_context import get_current_activation


class ActivationJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that adds the current activation context."""

    def add_fields(self, log_record, record, message_dict):
        """Add custom fields to log record."""
        super().add_fields(log_record, record, message_dict)

        activation = get_current_activation()
        if activation is not None:
            log_record["project"] = activation.project_name
            log_record["scope"] = activation.scope_name
            log_record["web_server"] = activation.server_name


def get_logging_config(environment: str = "development") -> dict:
    """
    Get logging configuration for the application.

    Args:
        environment: Environment name (development, production, test)

    Returns:
        Django logging configuration dictionary
    """
    log_level = "DEBUG" if environment == "development" else "INFO"
    if environment == "test":
        # Propagate to root so that pytest's caplog sees application logs
        app_logger = {"level": log_level, "propagate": True}
    else:
        app_logger = {
            "handlers": ["console"],
            "level": log_level,
            "propagate": False,
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": ActivationJsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
            "simple": {
                "format": "{levelname} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "simple" if environment == "test" else "json",
                "stream": sys.stderr,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": log_level,
        },
        "loggers": {
            "django": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
            "core": dict(app_logger),
            "webservers": dict(app_logger),
        },
    }
