# tests/conftest.py
import logging
from unittest.mock import MagicMock

import pytest


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Keeps handlers installed by setup_logging from leaking between tests."""
    root_logger = logging.getLogger()
    saved_level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        # pytest manages its own capture handlers
        if not type(handler).__module__.startswith("_pytest"):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(saved_level)


@pytest.fixture(autouse=True)
def _clean_settings_env(monkeypatch):
    """Settings tests must not pick up the developer's own overrides."""
    for name in (
        "DEVENV_APP_NAME",
        "DEVENV_DATA_DIR",
        "DEVENV_GIT_COMMAND",
        "DEVENV_LOG_LEVEL",
        "PLUGIN_MANAGER_NAME",
        "PLUGIN_MANAGER_REPO_URL",
        "PLUGIN_MANAGER_BRANCH",
        "PLUGIN_MANAGER_CLONE_FILTER",
        "PLUGIN_MANAGER_INSTALL_SUFFIX",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_logger():
    """Fixture to create a mock logger for testing."""
    return MagicMock(spec=logging.Logger)
