"""Web layer for the short-link proxy."""

from .app_factory import create_app

__all__ = ["create_app"]
