"""Pytest fixtures for hookify testing."""

import pytest

from hookify import conf, log
from hookify.log import hookify_log_clear
from tests.test_utils import TestRulesProjectEnvironment
from tests.test_utils.hook_data_factory import hook_data_factory  # noqa: F401


@pytest.fixture(autouse=True)
def isolated_log(tmp_path, monkeypatch):
    """Send log lines to a per-test file and keep the plugin root unset."""
    monkeypatch.setattr(log, "LOG", True)
    monkeypatch.setattr(log, "LOG_TO_STDERR", True)
    monkeypatch.setattr(log, "LOG_FILE", tmp_path / "logs" / "hookify.log")
    monkeypatch.delenv(conf.PLUGIN_ROOT_ENV, raising=False)
    yield log.LOG_FILE
    hookify_log_clear()


@pytest.fixture
def log_text(isolated_log):
    """Callable returning everything logged so far in this test."""
    def _read() -> str:
        return isolated_log.read_text(encoding="utf-8") if isolated_log.exists() else ""
    return _read


@pytest.fixture
def rules_env(tmp_path, monkeypatch):
    """Provides a project with .claude/ and a plugin root with rules/."""
    return TestRulesProjectEnvironment(tmp_path, monkeypatch)
