"""Fixtures for infrastructure.logging tests."""

import pytest
import structlog
from unittest.mock import Mock

from infrastructure.configuration import Settings
from infrastructure.logging import configure_logging


@pytest.fixture
def mock_settings():
    """Mock Settings instance for testing."""
    settings = Mock(spec=Settings)
    settings.LOG_LEVEL = "INFO"
    settings.GIT_SHA = "abc1234"
    settings.is_production = False
    return settings


@pytest.fixture
def restore_logging():
    """Put the test-mode logging configuration back after a test."""
    yield
    structlog.reset_defaults()
    configure_logging()
