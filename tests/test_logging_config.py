# Area: Shared Tests
"""Tests for logging configuration."""

import json
import logging
import os
import sys
import tempfile

import pytest

from leaderboard_bot._shared import logging_config
from leaderboard_bot._shared.logging_config import (
    JSONFormatter,
    QuietFilter,
    TerminalFormatter,
    disable_quiet_mode,
    enable_quiet_mode,
    is_quiet_mode_enabled,
    setup_logging,
)


def make_record(level=logging.INFO, msg="hello"):
    return logging.LogRecord("leaderboard_bot.test", level, __file__, 1, msg, None, None)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    pkg_logger = logging.getLogger("leaderboard_bot")
    for handler in list(pkg_logger.handlers):
        handler.close()
    pkg_logger.handlers.clear()
    pkg_logger.setLevel(logging.NOTSET)
    pkg_logger.propagate = True
    disable_quiet_mode()


class TestQuietMode:
    """Tests for the quiet-mode toggle and filter."""

    def test_toggle(self):
        assert not is_quiet_mode_enabled()
        enable_quiet_mode()
        assert is_quiet_mode_enabled()
        disable_quiet_mode()
        assert not is_quiet_mode_enabled()

    def test_filter_passes_everything_when_off(self):
        assert QuietFilter().filter(make_record(logging.DEBUG))

    def test_filter_hides_info_when_on(self):
        enable_quiet_mode()
        quiet = QuietFilter()
        assert not quiet.filter(make_record(logging.INFO))
        assert quiet.filter(make_record(logging.WARNING))
        assert quiet.filter(make_record(logging.ERROR))


class TestFormatters:
    """Tests for TerminalFormatter and JSONFormatter."""

    def test_terminal_colors_level(self):
        output = TerminalFormatter(fmt="%(levelname)s %(message)s").format(make_record())
        assert TerminalFormatter.COLORS["INFO"] in output
        assert output.endswith("hello")

    def test_terminal_leaves_record_untouched(self):
        record = make_record()
        TerminalFormatter(fmt="%(levelname)s").format(record)
        assert record.levelname == "INFO"

    def test_json_fields(self):
        data = json.loads(JSONFormatter().format(make_record(logging.WARNING, "careful")))
        assert data["level"] == "WARNING"
        assert data["logger"] == "leaderboard_bot.test"
        assert data["message"] == "careful"
        assert "timestamp" in data

    def test_json_includes_exception(self):
        try:
            raise ValueError("bad")
        except ValueError:
            record = logging.LogRecord(
                "leaderboard_bot", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )
        data = json.loads(JSONFormatter().format(record))
        assert "ValueError: bad" in data["exception"]


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_writes_json_lines_to_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_path = os.path.join(tmp, "logs", "bot.log")
            setup_logging(log_file_path=log_path)

            logging.getLogger("leaderboard_bot.store").info("saved board")
            for handler in logging.getLogger("leaderboard_bot").handlers:
                handler.flush()

            with open(log_path, encoding="utf-8") as f:
                lines = [json.loads(line) for line in f if line.strip()]

            assert lines[-1]["message"] == "saved board"
            assert lines[-1]["logger"] == "leaderboard_bot.store"

            for handler in logging.getLogger("leaderboard_bot").handlers:
                handler.close()

    def test_replaces_handlers_and_stops_propagation(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_path = os.path.join(tmp, "bot.log")
            setup_logging(log_file_path=log_path)
            setup_logging(log_file_path=log_path)

            pkg_logger = logging.getLogger("leaderboard_bot")
            assert len(pkg_logger.handlers) == 2
            assert pkg_logger.propagate is False

            for handler in pkg_logger.handlers:
                handler.close()

    def test_module_logger_name(self):
        assert logging_config.logger.name == "leaderboard_bot"
