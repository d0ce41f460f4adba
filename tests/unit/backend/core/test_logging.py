"""
Unit Tests for Centralized Logging.

Tests the logging configuration, structured fields, and source handling.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture(autouse=True)
def _reset_logging_config():
    from intake.backend.core import logging as logging_module

    logging_module._logging_config = None
    yield
    logging_module._logging_config = None


@pytest.fixture
def logging_config():
    """A logging configuration equivalent to logging.yaml."""
    return {
        "level": "INFO",
        "format": "json",
        "handlers": {
            "console": {"enabled": True},
            "file": {
                "enabled": False,
                "path": "logs/system.jsonl",
                "max_bytes": 10485760,
                "backup_count": 5,
            },
        },
    }


class TestValidSources:
    def test_valid_sources_contains_expected_values(self):
        from intake.backend.core.logging import VALID_SOURCES

        assert VALID_SOURCES == frozenset(
            {"web", "cli", "forms", "delivery", "internal", "unknown"}
        )


class TestLoggingConfigLoading:
    """Tests for logging configuration loading from YAML."""

    def test_reads_project_logging_yaml(self):
        from intake.backend.core.logging import _load_logging_config

        config = _load_logging_config()

        assert config["format"] in ("json", "console")
        assert "console" in config["handlers"]
        assert "file" in config["handlers"]

    def test_config_is_cached(self, logging_config):
        from intake.backend.core import logging as logging_module

        with patch(
            "intake.backend.core.logging.load_yaml_config", return_value=logging_config
        ) as loader:
            first = logging_module._load_logging_config()
            second = logging_module._load_logging_config()

        assert first is second
        loader.assert_called_once_with("logging.yaml")

    def test_raises_if_file_missing(self):
        from intake.backend.core import logging as logging_module

        with patch(
            "intake.backend.core.logging.load_yaml_config",
            side_effect=FileNotFoundError("Configuration file not found: logging.yaml"),
        ):
            with pytest.raises(FileNotFoundError, match="logging.yaml"):
                logging_module._load_logging_config()


class TestSetupLogging:
    def test_uses_config_defaults(self, logging_config):
        from intake.backend.core.logging import setup_logging

        with patch("intake.backend.core.logging._load_logging_config", return_value=logging_config):
            setup_logging()

        assert logging.getLogger().level == logging.INFO

    def test_override_takes_precedence(self, logging_config):
        from intake.backend.core.logging import setup_logging

        with patch("intake.backend.core.logging._load_logging_config", return_value=logging_config):
            setup_logging(level="DEBUG", format_type="console")

        assert logging.getLogger().level == logging.DEBUG

    def test_console_handler_only_when_file_disabled(self, logging_config):
        from intake.backend.core.logging import setup_logging

        with patch("intake.backend.core.logging._load_logging_config", return_value=logging_config):
            setup_logging(enable_file_logging=False)

        handler_types = [type(h).__name__ for h in logging.getLogger().handlers]
        assert handler_types == ["StreamHandler"]

    def test_file_handler_when_enabled(self, tmp_path, logging_config):
        from intake.backend.core.logging import setup_logging

        log_file = tmp_path / "logs" / "system.jsonl"

        with patch("intake.backend.core.logging._load_logging_config", return_value=logging_config), \
             patch("intake.backend.core.logging._resolve_log_path", return_value=log_file):
            setup_logging(enable_console=False, enable_file_logging=True)

        handler_types = [type(h).__name__ for h in logging.getLogger().handlers]
        assert handler_types == ["RotatingFileHandler"]
        assert log_file.parent.is_dir()

    def test_httpx_request_lines_are_silenced(self, logging_config):
        from intake.backend.core.logging import setup_logging

        with patch("intake.backend.core.logging._load_logging_config", return_value=logging_config):
            setup_logging(level="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING


class TestLogWithSource:
    def test_adds_source_field(self):
        from intake.backend.core.logging import get_logger, log_with_source

        logger = get_logger("test")
        mock_info = MagicMock()

        with patch.object(logger, "info", mock_info):
            log_with_source(logger, "forms", "info", "Page submitted", page_id="abc")

        mock_info.assert_called_once_with("Page submitted", source="forms", page_id="abc")

    def test_raises_on_invalid_level(self):
        from intake.backend.core.logging import get_logger, log_with_source

        with pytest.raises(AttributeError):
            log_with_source(get_logger("test"), "web", "nonexistent_level", "Test")


class TestResolveLogPath:
    def test_relative_to_project_root(self, tmp_path):
        from intake.backend.core.logging import _resolve_log_path

        with patch("intake.backend.core.logging.find_project_root", return_value=tmp_path):
            assert _resolve_log_path("logs/system.jsonl") == tmp_path / "logs" / "system.jsonl"
