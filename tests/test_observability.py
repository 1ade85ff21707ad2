"""
Tests for logging setup.
"""

import logging
from pathlib import Path

import pytest

from wasmsplice.core.observability.logging_config import (
    parse_level,
    resolve_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestParseLevel:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            ("error", logging.ERROR),
            ("bogus", logging.WARNING),
            (None, logging.WARNING),
            ("", logging.WARNING),
        ],
    )
    def test_levels(self, name, expected):
        assert parse_level(name) == expected


class TestResolveLevel:
    def test_flags_beat_environment(self):
        env = {"WSP_LOG_LEVEL": "ERROR"}
        assert resolve_level(debug=True, verbose=True, environ=env) == "DEBUG"
        assert resolve_level(verbose=True, environ=env) == "INFO"
        assert resolve_level(quiet=True, environ={"WSP_LOG_LEVEL": "DEBUG"}) == "ERROR"

    def test_environment(self):
        assert resolve_level(environ={"WSP_LOG_LEVEL": "info"}) == "info"

    def test_default(self):
        assert resolve_level(environ={}) == "WARNING"


class TestSetupLogging:
    def test_console_only(self):
        setup_logging("INFO", environ={})
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_file_handler_lowers_root_level(self, tmp_path: Path):
        log_file = tmp_path / "splice.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG", environ={})
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        logging.getLogger("wasmsplice.test").debug("scaffolded demo")
        for handler in root.handlers:
            handler.flush()
        assert "scaffolded demo" in log_file.read_text()

    def test_file_from_environment(self, tmp_path: Path):
        log_file = tmp_path / "env.log"
        setup_logging("ERROR", environ={"WSP_LOG_FILE": str(log_file), "WSP_LOG_FILE_LEVEL": "INFO"})
        logging.getLogger("wasmsplice.test").info("built demo")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "built demo" in log_file.read_text()

    def test_repeated_setup_replaces_handlers(self):
        setup_logging("DEBUG", environ={})
        setup_logging("WARNING", environ={})
        assert len(logging.getLogger().handlers) == 1
