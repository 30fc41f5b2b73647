"""
Error classes for the short-link proxy.

Every error carries the HTTP status it maps to. The web layer converts
them into short plain-text responses; nothing here knows about HTTP framing.
"""

from typing import Optional


class ProxyLinkError(Exception):
    """
    Base error class.
    
    Attributes:
        status_code: HTTP status code (default: 500)
        message: Error message (default: "Internal server error")
    """
    status_code: int = 500
    message: str = "Internal server error"
    
    def __init__(self, message: Optional[str] = None):
        """
        Initialize error.
        
        Args:
            message: Error message (overrides default)
        """
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(ProxyLinkError):
    """400 Malformed or missing input."""
    status_code = 400
    message = "Bad request"


class NotFoundError(ProxyLinkError):
    """404 Unknown short code."""
    status_code = 404
    message = "Not found"


class InvalidTargetError(ProxyLinkError):
    """400 Stored target URL failed re-validation."""
    status_code = 400
    message = "Invalid target URL"


class UpstreamUnavailableError(ProxyLinkError):
    """502 Network or transport failure reaching the target."""
    status_code = 502
    message = "Upstream fetch failed"


class UpstreamStatusError(ProxyLinkError):
    """502 Target answered with a status the relay does not pass through."""
    status_code = 502
    
    def __init__(self, upstream_status: int):
        self.upstream_status = upstream_status
        super().__init__(f"Upstream error: {upstream_status}")


class CodeAllocationError(ProxyLinkError):
    """503 No free short code found within the retry bound."""
    status_code = 503
    message = "Unable to allocate a short code"
