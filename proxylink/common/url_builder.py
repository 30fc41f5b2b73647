"""URL building utilities."""

# Path segment under which short codes are proxied
PROXY_PATH_PREFIX = "/p"


def build_short_url(short_code: str, base_url: str) -> str:
    """Build complete short URL.
    
    Args:
        short_code: The short code
        base_url: Base URL (e.g., https://example.com)
        
    Returns:
        Complete short URL (e.g., https://example.com/p/abc123)
    """
    return f"{base_url.rstrip('/')}{PROXY_PATH_PREFIX}/{short_code}"
