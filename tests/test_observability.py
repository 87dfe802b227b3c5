"""
Tests for logging setup.
"""

import logging
from pathlib import Path

import pytest

from bootstrapper.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    ENV_LEVEL,
    resolve_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_root_logger(monkeypatch):
    for name in (ENV_LEVEL, ENV_FILE, ENV_FILE_LEVEL):
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_default(self):
        assert resolve_level() == "WARNING"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv(ENV_LEVEL, "INFO")
        assert resolve_level() == "INFO"

    def test_flags_beat_environment(self, monkeypatch):
        monkeypatch.setenv(ENV_LEVEL, "CRITICAL")
        assert resolve_level(quiet=True) == "ERROR"
        assert resolve_level(verbose=True, quiet=True) == "INFO"
        assert resolve_level(verbose=True, debug=True) == "DEBUG"


class TestSetupLogging:
    def test_console_level(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_unknown_level_is_warning(self):
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_log_file_from_environment(self, tmp_path: Path, monkeypatch):
        log_file = tmp_path / "bootstrap.log"
        monkeypatch.setenv(ENV_FILE, str(log_file))
        monkeypatch.setenv(ENV_FILE_LEVEL, "DEBUG")

        setup_logging("WARNING")
        logging.getLogger("bootstrapper.test").debug("stage detail")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert "stage detail" in log_file.read_text()

    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging("INFO")
        setup_logging("DEBUG")
        assert len(logging.getLogger().handlers) == 1
