"""Tests for structured logging configuration."""

import logging

from pythonjsonlogger.json import JsonFormatter

from incident_bot.logging_config import configure_logging


def test_configure_logging_uses_json_formatter():
    configure_logging("debug")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)
    configure_logging("INFO")
