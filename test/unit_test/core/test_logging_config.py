"""Unit tests for logging configuration module.

Tests verify that setup_logging configures handlers, formats, file logging
and per-module levels.
"""

import logging
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from educenter.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    get_logger,
    setup_logging,
)


def _console_handler():
    return next(
        (
            h
            for h in logging.getLogger().handlers
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        ),
        None,
    )


class TestSetupLoggingLevels:
    """Test setup_logging with different log levels."""

    @pytest.mark.parametrize(
        "log_level,expected_level",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("debug", logging.DEBUG),
        ],
    )
    def test_console_level(self, log_level, expected_level):
        setup_logging(log_level=log_level, enable_file=False)

        handler = _console_handler()
        assert handler is not None
        assert handler.level == expected_level

    def test_root_logger_captures_everything(self):
        setup_logging(log_level="ERROR", enable_file=False)
        assert logging.getLogger().level == logging.DEBUG


class TestSetupLoggingFormats:
    @pytest.mark.parametrize(
        "log_format,expected_format",
        [
            ("simple", SIMPLE_FORMAT),
            ("detailed", DETAILED_FORMAT),
            ("json", JSON_FORMAT),
            ("unknown", DETAILED_FORMAT),
        ],
    )
    def test_format(self, log_format, expected_format):
        setup_logging(log_format=log_format, enable_file=False)
        assert _console_handler().formatter._fmt == expected_format


class TestSetupLoggingHandlers:
    def test_removes_existing_handlers(self):
        setup_logging(enable_file=False)
        setup_logging(enable_file=False)
        assert len(logging.getLogger().handlers) == 1

    def test_file_logging_writes_to_directory(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_dir = Path(tmp) / "nested" / "logs"
            with patch("educenter.core.logging_config.ENABLE_FILE_LOGGING", True), patch(
                "educenter.core.logging_config.LOG_FILE_DIR", str(log_dir)
            ):
                setup_logging(enable_file=True)

            file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
            assert len(file_handlers) == 1
            assert file_handlers[0].level == logging.DEBUG
            assert log_dir.is_dir()

            for handler in file_handlers:
                logging.getLogger().removeHandler(handler)
                handler.close()

    def test_file_logging_disabled_by_flag(self):
        with patch("educenter.core.logging_config.ENABLE_FILE_LOGGING", False):
            setup_logging(enable_file=True)
        assert not any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)


class TestModuleLevels:
    @pytest.mark.parametrize(
        "module_name,expected_level",
        [
            ("educenter", logging.INFO),
            ("educenter.server.api", logging.DEBUG),
            ("sqlalchemy.engine", logging.WARNING),
            ("passlib", logging.ERROR),
        ],
    )
    def test_module_specific_levels(self, module_name, expected_level):
        setup_logging(enable_file=False)
        assert logging.getLogger(module_name).level == expected_level

    def test_all_module_levels_applied(self):
        setup_logging(enable_file=False)
        for module_name, level in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(module_name).level == logging.getLevelName(level)


class TestGetLogger:
    def test_returns_named_logger(self):
        logger = get_logger("educenter.server.api.v1.auth")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "educenter.server.api.v1.auth"

    def test_same_name_same_instance(self):
        assert get_logger("educenter.test") is get_logger("educenter.test")

    def test_inherits_module_level(self):
        setup_logging(enable_file=False)
        logger = get_logger("educenter.server.api.v1.auth")
        assert logger.getEffectiveLevel() == logging.DEBUG
