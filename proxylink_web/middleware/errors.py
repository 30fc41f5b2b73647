"""
Error handling for consistent plain-text error responses.
"""

import logging
from typing import Callable

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from proxylink.errors import ProxyLinkError

logger = logging.getLogger("proxylink.web")


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Converts errors raised by route handlers into plain-text responses.
    
    ProxyLinkError becomes its own status and message. Anything else is
    logged with a traceback and answered with a bare 500, so one failing
    request never takes the service down or leaks internals.
    """
    
    async def dispatch(self, request: Request, call_next: Callable):
        try:
            return await call_next(request)
        except ProxyLinkError as e:
            logger.warning(f"{type(e).__name__} in {request.url.path}: {e.message}")
            return PlainTextResponse(e.message, status_code=e.status_code)
        except Exception as e:
            logger.error(f"Unhandled error in {request.url.path}: {e}", exc_info=True)
            return PlainTextResponse("Internal server error", status_code=500)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """Unknown paths and unsupported methods."""
    message = "Not found" if exc.status_code == 404 else str(exc.detail)
    return PlainTextResponse(message, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> PlainTextResponse:
    """Malformed JSON API bodies."""
    errors = exc.errors()
    message = errors[0].get("msg", "Bad request") if errors else "Bad request"
    return PlainTextResponse(message, status_code=400)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the plain-text handlers on an app."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
