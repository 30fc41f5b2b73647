"""Middleware for the short-link proxy web app."""

from .errors import ErrorHandlingMiddleware, register_exception_handlers
from .logging import LoggingMiddleware

__all__ = ["ErrorHandlingMiddleware", "register_exception_handlers", "LoggingMiddleware"]
