"""Validation utilities for target URLs."""

import re
from typing import Optional, Tuple


# Only http(s) targets are stored or proxied
TARGET_URL_PATTERN = re.compile(r"^https?://")


def is_valid_target_url(url: Optional[str]) -> Tuple[bool, str]:
    """Validate a target URL.
    
    Used both before a mapping is written and again before a stored
    target is fetched.
    
    Args:
        url: The URL to validate
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "Missing ?url="
    
    if not TARGET_URL_PATTERN.match(url):
        return False, "URL must start with http:// or https://"
    
    return True, ""
