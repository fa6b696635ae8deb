# ABOUTME: Tests for logging configuration module
# ABOUTME: Validates dual-mode logging setup, record routing and third-party library suppression

import logging
import os
from unittest.mock import patch

import pytest
from loguru import logger as loguru_logger
from pydantic import ValidationError

from webdev_scraper.config import reload_config
from webdev_scraper.utils.logging import get_logger
from webdev_scraper.utils.logging.config import (
    NOISY_LOGGERS,
    InterceptHandler,
    LoggingMode,
    configure_logging,
    detect_logging_mode,
    get_logging_status,
)


class TestDetectLoggingMode:
    """Test logging mode detection logic."""

    def test_detect_mode_from_config(self):
        with patch.dict(os.environ, {"WEBDEV_SCRAPER_LOG_MODE": "production"}):
            reload_config()
            assert detect_logging_mode() == LoggingMode.PRODUCTION
        with patch.dict(os.environ, {"WEBDEV_SCRAPER_LOG_MODE": "Interactive"}):
            reload_config()
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_configured_mode_wins_over_tty(self):
        with (
            patch.dict(os.environ, {"WEBDEV_SCRAPER_LOG_MODE": "interactive"}),
            patch("sys.stdout.isatty", return_value=False),
        ):
            reload_config()
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_invalid_mode_is_rejected(self):
        with patch.dict(os.environ, {"WEBDEV_SCRAPER_LOG_MODE": "invalid"}), pytest.raises(ValidationError):
            reload_config()

    def test_detect_mode_from_tty(self):
        with patch("sys.stdout.isatty", return_value=True):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE
        with patch("sys.stdout.isatty", return_value=False):
            assert detect_logging_mode() == LoggingMode.PRODUCTION


class TestConfigureLogging:
    """Test logging configuration functionality."""

    def teardown_method(self):
        loguru_logger.remove()
        logging.getLogger().setLevel(logging.WARNING)

    def test_production_mode_writes_no_files(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="DEBUG")

        assert not (tmp_path / "logs").exists()
        assert logging.getLogger().level == logging.DEBUG

    def test_interactive_mode_creates_log_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO")

        assert (tmp_path / "logs").is_dir()

    def test_third_party_loggers_lowered(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        configure_logging(mode=LoggingMode.PRODUCTION)

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_repeated_configuration_installs_one_handler(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        configure_logging(mode=LoggingMode.PRODUCTION)
        configure_logging(mode=LoggingMode.PRODUCTION)

        handlers = [h for h in logging.getLogger().handlers if isinstance(h, InterceptHandler)]
        assert len(handlers) == 1

    def test_production_records_stay_off_stdout(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="INFO")

        get_logger("webdev_scraper.core.ingestion").info("Created article", article_id=7)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Created article" in captured.err
        assert "article_id=7" in captured.err

    def test_interactive_records_reach_log_file(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO")

        get_logger("webdev_scraper.core.curation").warning("Toggle save failed", article_id=3)
        get_logger("webdev_scraper.core.curation").debug("Below the configured level")
        loguru_logger.remove()  # closes and flushes the file sinks

        contents = (tmp_path / "logs" / "webdev-scraper.log").read_text()
        assert "Toggle save failed" in contents
        assert "article_id=3" in contents
        assert "Below the configured level" not in contents
        assert capsys.readouterr().out == ""


def test_logging_status_in_production():
    with patch.dict(os.environ, {"WEBDEV_SCRAPER_LOG_MODE": "production"}):
        reload_config()
        status = get_logging_status()

    assert status["mode"] == LoggingMode.PRODUCTION
    assert status["log_files"] == {"main": None, "errors": None}
    assert "httpx" in status["third_party_suppressed"]
