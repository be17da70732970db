"""Tests for common utilities."""

import logging

from shortener.common.validators import is_valid_url
from shortener.common.url_builder import build_short_url
from shortener.common.logging_config import get_logger, setup_logging


class TestValidators:
    """Test validation utilities."""

    def test_valid_urls(self):
        valid, _ = is_valid_url("https://example.com")
        assert valid

        valid, _ = is_valid_url("http://example.com/path")
        assert valid

        valid, _ = is_valid_url("https://sub.example.com:8080/path?query=value#frag")
        assert valid

    def test_invalid_urls(self):
        valid, error = is_valid_url("")
        assert not valid
        assert "required" in error.lower()

        valid, error = is_valid_url("not-a-url")
        assert not valid

        valid, error = is_valid_url("ftp://example.com")
        assert not valid
        assert "http" in error.lower()

        valid, error = is_valid_url("http://example.com:notaport/")
        assert not valid

        valid, error = is_valid_url("https:///path-only")
        assert not valid
        assert "domain" in error.lower()


class TestURLBuilder:
    """Test URL building utilities."""

    def test_domain_with_trailing_slash(self):
        assert build_short_url("abc123", "https://example.com/") == "https://example.com/abc123"

    def test_domain_without_trailing_slash(self):
        assert build_short_url("abc123", "https://example.com") == "https://example.com/abc123"

    def test_domain_with_path(self):
        assert build_short_url("abc123", "https://example.com/s/") == "https://example.com/s/abc123"


class TestLogging:
    """Test logging setup."""

    def test_setup_logging_level(self):
        logger = setup_logging(level="warning")

        assert logger.name == "shortener"
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1

    def test_setup_logging_with_file(self, tmp_path):
        log_file = tmp_path / "shortener.log"
        logger = setup_logging(level="INFO", log_file=str(log_file), json_format=True)

        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()

        assert '"message": "hello"' in log_file.read_text()
        setup_logging(level="INFO")

    def test_unknown_level_defaults_to_info(self):
        assert setup_logging(level="chatty").level == logging.INFO

    def test_get_logger_namespacing(self):
        assert get_logger().name == "shortener"
        assert get_logger("web").name == "shortener.web"
        assert get_logger("shortener.sweeper").name == "shortener.sweeper"
