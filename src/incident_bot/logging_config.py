"""Structured JSON logging configuration for Cloud Run.

Configures Python stdlib logging to emit JSON with GCP-compatible field names.
Cloud Run auto-extracts `severity`, `message`, and other fields from JSON on stdout.

Usage:
    from incident_bot.logging_config import configure_logging
    configure_logging("INFO")
"""

import logging
import logging.config

LOGGING_CONFIG: dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(funcName)s %(message)s",
            "rename_fields": {
                "levelname": "severity",
                "asctime": "timestamp",
                "name": "logger",
            },
            "static_fields": {
                "service": "incident-bot",
            },
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        },
    },
    "root": {
        "level": "INFO",
        "handlers": ["console"],
    },
}


def configure_logging(level: str = "INFO") -> None:
    """Apply structured JSON logging configuration.

    Call once at application startup (the FastAPI lifespan does this).
    ``level`` overrides the root level, normally taken from ``Settings.log_level``.
    """
    config = {**LOGGING_CONFIG, "root": {**LOGGING_CONFIG["root"], "level": level.upper()}}
    logging.config.dictConfig(config)
