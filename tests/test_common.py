"""Tests for common utilities."""

import json
import logging
import sys

from proxylink.common.validators import is_valid_target_url
from proxylink.common.headers import extract_forwarded_headers, build_base_url
from proxylink.common.url_builder import build_short_url
from proxylink.common.logging_config import JsonFormatter, setup_logging


class TestValidators:
    """Test validation utilities."""
    
    def test_valid_urls(self):
        """Test valid URL validation."""
        valid, _ = is_valid_target_url("https://example.com")
        assert valid
        
        valid, _ = is_valid_target_url("http://example.com/path?q=1")
        assert valid
    
    def test_missing_url(self):
        """Empty or missing URL is reported as missing."""
        for value in ("", None):
            valid, error = is_valid_target_url(value)
            assert not valid
            assert error == "Missing ?url="
    
    def test_bad_scheme(self):
        """Anything not starting with http:// or https:// is rejected."""
        for value in ("notaurl", "ftp://example.com", "HTTPS://example.com", " https://example.com"):
            valid, error = is_valid_target_url(value)
            assert not valid
            assert "http://" in error


class TestHeaders:
    """Test header utilities."""
    
    def test_extract_forwarded_headers(self):
        """Test forwarded header extraction."""
        headers = {
            "X-Forwarded-Proto": "https",
            "X-Forwarded-Host": "example.com",
            "X-Forwarded-For": "1.2.3.4",
        }
        
        result = extract_forwarded_headers(headers)
        assert result["forwarded_proto"] == "https"
        assert result["forwarded_host"] == "example.com"
        assert result["forwarded_for"] == "1.2.3.4"
    
    def test_build_base_url_from_forwarded_headers(self):
        """Forwarded headers win over the Host header."""
        headers = {
            "x-forwarded-proto": "http",
            "x-forwarded-host": "public.example.com",
        }
        
        base_url = build_base_url(
            headers=headers,
            fallback_base_url="http://localhost:9200",
            request_host="internal:9200",
        )
        
        assert base_url == "http://public.example.com"
    
    def test_build_base_url_from_host(self):
        """Host header is combined with the configured scheme."""
        base_url = build_base_url(
            headers={},
            fallback_base_url="http://localhost:9200",
            request_host="short.example.com",
        )
        
        assert base_url == "https://short.example.com"
    
    def test_build_base_url_fallback(self):
        """Test base URL fallback."""
        base_url = build_base_url(
            headers={},
            fallback_base_url="http://localhost:9200/",
        )
        
        assert base_url == "http://localhost:9200"


class TestURLBuilder:
    """Test URL building utilities."""
    
    def test_build_short_url(self):
        """Short URLs live under /p/."""
        assert build_short_url("abc123", "https://example.com") == "https://example.com/p/abc123"
        assert build_short_url("abc123", "https://example.com/") == "https://example.com/p/abc123"


class TestLogging:
    """Test logging configuration."""
    
    def make_record(self, msg, *args):
        return logging.LogRecord("proxylink.relay", logging.WARNING, __file__, 1, msg, args, None)
    
    def test_json_formatter_escapes_message(self):
        """Quotes and backslashes in messages still produce valid JSON."""
        message = 'Upstream fetch failed for abc123 (https://example.com/"quoted"\\path): ConnectError(\'refused\')'
        
        line = JsonFormatter().format(self.make_record(message))
        data = json.loads(line)
        
        assert data["message"] == message
        assert data["level"] == "WARNING"
        assert data["logger"] == "proxylink.relay"
        assert data["timestamp"].endswith("Z")
    
    def test_json_formatter_interpolates_args(self):
        """%-style args are applied before encoding."""
        data = json.loads(JsonFormatter().format(self.make_record('code %s -> "%s"', "abc123", "https://x")))
        
        assert data["message"] == 'code abc123 -> "https://x"'
    
    def test_json_formatter_includes_exception(self):
        """Tracebacks are carried in their own field."""
        try:
            raise RuntimeError('bad "thing"')
        except RuntimeError:
            record = logging.LogRecord("proxylink", logging.ERROR, __file__, 1, "boom", (), sys.exc_info())
        
        data = json.loads(JsonFormatter().format(record))
        
        assert "RuntimeError" in data["exception"]
    
    def test_setup_logging_json(self):
        """json_format installs the JSON formatter."""
        logger = setup_logging(level="DEBUG", json_format=True)
        
        assert logger.name == "proxylink"
        assert logger.level == logging.DEBUG
        assert all(isinstance(h.formatter, JsonFormatter) for h in logger.handlers)
    
    def test_setup_logging_file(self, tmp_path):
        """A log file receives records alongside stdout."""
        log_file = tmp_path / "proxylink.log"
        logger = setup_logging(level="INFO", log_file=str(log_file), json_format=True)
        
        logger.info('created "abc123"')
        for handler in logger.handlers:
            handler.flush()
        
        assert json.loads(log_file.read_text().strip())["message"] == 'created "abc123"'
        
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
