"""Header parsing utilities for building public short URLs."""

from typing import Dict, Optional


def extract_forwarded_headers(headers: Dict[str, str]) -> Dict[str, Optional[str]]:
    """Extract X-Forwarded-* headers from request.
    
    Args:
        headers: Request headers dictionary
        
    Returns:
        Dictionary with forwarded_proto, forwarded_host, forwarded_for
    """
    headers_lower = {k.lower(): v for k, v in headers.items()}
    
    return {
        "forwarded_proto": headers_lower.get("x-forwarded-proto"),
        "forwarded_host": headers_lower.get("x-forwarded-host"),
        "forwarded_for": headers_lower.get("x-forwarded-for"),
    }


def build_base_url(
    headers: Dict[str, str],
    fallback_base_url: str,
    scheme: str = "https",
    request_host: Optional[str] = None,
) -> str:
    """Build base URL from headers or fallback.
    
    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host
    2. Configured scheme + request Host header
    3. Fallback base URL from config
    
    Args:
        headers: Request headers
        fallback_base_url: Fallback base URL from configuration
        scheme: Scheme used together with the request host
        request_host: Request Host header value
        
    Returns:
        Base URL (e.g., https://example.com)
    """
    forwarded = extract_forwarded_headers(headers)
    
    if forwarded["forwarded_proto"] and forwarded["forwarded_host"]:
        return f"{forwarded['forwarded_proto']}://{forwarded['forwarded_host']}"
    
    if request_host:
        return f"{scheme}://{request_host}"
    
    return fallback_base_url.rstrip("/")
