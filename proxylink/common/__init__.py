"""Common utilities for the short-link proxy."""

from .validators import is_valid_target_url, TARGET_URL_PATTERN
from .headers import extract_forwarded_headers, build_base_url
from .url_builder import build_short_url
from .logging_config import setup_logging

__all__ = [
    "is_valid_target_url",
    "TARGET_URL_PATTERN",
    "extract_forwarded_headers",
    "build_base_url",
    "build_short_url",
    "setup_logging",
]
