"""
Unit tests for logging setup.
"""
import logging

from logger_config import get_logger, set_log_level, LOG_FORMAT


class TestGetLogger:
    """Tests for get_logger and set_log_level."""

    def test_single_stdout_handler(self):
        logger = get_logger('tests.single_handler')

        assert get_logger('tests.single_handler') is logger
        assert len(logger.handlers) == 1
        assert logger.handlers[0].formatter._fmt == LOG_FORMAT
        assert logger.propagate is False

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv('LOG_LEVEL', 'warning')

        logger = get_logger('tests.env_level')

        assert logger.level == logging.WARNING

    def test_unknown_level_defaults_to_info(self, monkeypatch):
        monkeypatch.setenv('LOG_LEVEL', 'chatty')

        assert get_logger('tests.unknown_level').level == logging.INFO

    def test_set_log_level_applies_to_existing_loggers(self):
        first = get_logger('tests.relevel_a')
        second = get_logger('tests.relevel_b')

        try:
            set_log_level('debug')

            for logger in (first, second):
                assert logger.level == logging.DEBUG
                assert logger.handlers[0].level == logging.DEBUG
        finally:
            set_log_level('INFO')
