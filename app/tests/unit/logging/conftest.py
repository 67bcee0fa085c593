"""Fixtures for jupii_i18n.logging tests."""

import pytest
from unittest.mock import Mock

from jupii_i18n.configuration import Settings


@pytest.fixture
def mock_settings():
    """Mock Settings instance for testing."""
    settings = Mock(spec=Settings)
    settings.LOG_LEVEL = "INFO"
    settings.PREFIX = "dev-"
    settings.GIT_SHA = "abc1234"
    settings.is_production = False
    return settings
