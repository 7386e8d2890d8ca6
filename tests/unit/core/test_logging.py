"""
Unit Tests for Centralized Logging.

Tests the logging configuration and handler selection.
"""

import logging
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from sshstats.core.config_schema import LoggingSchema


@pytest.fixture
def logging_config() -> LoggingSchema:
    """Logging settings with console on and file off."""
    return LoggingSchema(
        level="INFO",
        format="json",
        handlers={
            "console": {"enabled": True},
            "file": {
                "enabled": False,
                "path": "logs/collector.jsonl",
                "max_bytes": 10485760,
                "backup_count": 5,
            },
        },
    )


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_configures_root_logger_level(self, logging_config):
        from sshstats.core.logging import setup_logging

        setup_logging(level="DEBUG", config=logging_config)

        assert logging.getLogger().level == logging.DEBUG

    def test_uses_config_level_when_not_overridden(self, logging_config):
        from sshstats.core.logging import setup_logging

        setup_logging(config=logging_config)

        assert logging.getLogger().level == logging.INFO

    def test_console_handler_writes_to_stderr(self, logging_config):
        from sshstats.core.logging import setup_logging

        setup_logging(format_type="console", config=logging_config)

        stream_handlers = [
            h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler
        ]
        assert len(stream_handlers) == 1
        assert stream_handlers[0].stream is sys.stderr

    def test_console_can_be_disabled(self, logging_config):
        from sshstats.core.logging import setup_logging

        setup_logging(enable_console=False, config=logging_config)

        assert logging.getLogger().handlers == []

    def test_file_logging_enabled(self, tmp_path, logging_config):
        from sshstats.core.logging import setup_logging

        log_file = tmp_path / "logs" / "collector.jsonl"

        with patch("sshstats.core.logging._resolve_log_path", return_value=log_file):
            setup_logging(enable_file_logging=True, config=logging_config)

        handler_types = [type(h).__name__ for h in logging.getLogger().handlers]
        assert "RotatingFileHandler" in handler_types
        assert log_file.parent.is_dir()

        for handler in logging.getLogger().handlers:
            handler.close()

    def test_repeated_setup_does_not_stack_handlers(self, logging_config):
        from sshstats.core.logging import setup_logging

        setup_logging(config=logging_config)
        setup_logging(config=logging_config)

        assert len(logging.getLogger().handlers) == 1

    def test_loads_config_when_not_given(self, settings_dir):
        from sshstats.core.logging import setup_logging

        (settings_dir / "logging.yaml").write_text("level: ERROR\n")
        setup_logging()

        assert logging.getLogger().level == logging.ERROR


class TestGetLogger:
    def test_returns_structlog_logger(self):
        from sshstats.core.logging import get_logger

        logger = get_logger("test.module")
        assert hasattr(logger, "bind")
        assert hasattr(logger, "warning")


class TestResolveLogPath:
    def test_relative_to_project_root(self, tmp_path):
        from sshstats.core.logging import _resolve_log_path

        with patch("sshstats.core.logging.find_project_root", return_value=tmp_path):
            assert _resolve_log_path("logs/collector.jsonl") == tmp_path / "logs" / "collector.jsonl"

    def test_relative_to_cwd_without_project_root(self, tmp_path, monkeypatch):
        from sshstats.core.logging import _resolve_log_path

        monkeypatch.chdir(tmp_path)
        with patch("sshstats.core.logging.find_project_root", side_effect=RuntimeError("none")):
            assert _resolve_log_path("collector.jsonl") == Path.cwd() / "collector.jsonl"

    def test_absolute_path_unchanged(self, tmp_path):
        from sshstats.core.logging import _resolve_log_path

        target = tmp_path / "x.jsonl"
        assert _resolve_log_path(str(target)) == target
