"""
Logging configuration for structured logging.

Every record is rendered as one JSON object on stdout, tagged with
the service name and the correlation id of the request being served.
"""

import sys

from pythonjsonlogger import jsonlogger

from core.request_context import get_correlation_id

SERVICE_NAME = "license-registry"

# Project packages logged at the environment's level
APP_LOGGERS = ("core", "api", "licenses")

LOG_LEVELS = {
    "development": "DEBUG",
    "test": "WARNING",
}


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that adds service and request context."""

    def add_fields(self, log_record, record, message_dict):
        """Add custom fields to log record."""
        super().add_fields(log_record, record, message_dict)
        log_record["service"] = SERVICE_NAME

        correlation_id = getattr(record, "correlation_id", None) or get_correlation_id()
        if correlation_id:
            log_record["correlation_id"] = correlation_id


def get_logging_config(environment: str = "development") -> dict:
    """
    Get logging configuration for the application.

    Args:
        environment: Environment name (development, production, test)

    Returns:
        Django logging configuration dictionary
    """
    log_level = LOG_LEVELS.get(environment, "INFO")

    def console_logger(level):
        return {"handlers": ["console"], "level": level, "propagate": False}

    loggers = {name: console_logger(log_level) for name in APP_LOGGERS}
    loggers["django"] = console_logger("INFO")
    loggers["django.request"] = console_logger("WARNING")

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": CustomJsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": sys.stdout,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": log_level,
        },
        "loggers": loggers,
    }
