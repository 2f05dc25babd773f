"""
Unit Tests for Logging Setup.

These tests verify:
1. Omitted arguments fall back to the application settings
2. Explicit level and format override the settings
"""

import logging

import pytest
import structlog

from credit_assessor.core.config import settings
from credit_assessor.core.logging import setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    root.setLevel(level)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_defaults_come_from_settings(self):
        setup_logging()

        expected = getattr(logging, settings.log_level.upper())
        assert logging.getLogger().level == expected

    def test_explicit_level_and_format(self):
        setup_logging(log_level="debug", log_format="console")

        assert logging.getLogger().level == logging.DEBUG
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_json_renderer(self):
        setup_logging(log_format="JSON")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
