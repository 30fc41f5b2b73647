"""Core logic for the short-link streaming proxy."""

from .shortcode import ShortCodeGenerator
from .registrar import LinkRegistrar, RegisteredLink
from .relay import ProxyRelay, RelayedResponse

__all__ = ["ShortCodeGenerator", "LinkRegistrar", "RegisteredLink", "ProxyRelay", "RelayedResponse"]
