"""JSON API routes implementation."""

from fastapi import APIRouter, Request
from datetime import datetime, timezone

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    LinkInfoResponse,
    HealthResponse,
)
from proxylink.errors import NotFoundError
from proxylink.common.headers import build_base_url

router = APIRouter()


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    summary="Create short link",
    description="Register a target URL and return its proxied short URL.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a short link."""
    registrar = request.app.state.registrar
    config = request.app.state.config
    
    base_url = build_base_url(
        headers=dict(request.headers),
        fallback_base_url=config.base_url,
        scheme=config.short_url_scheme,
        request_host=request.headers.get("host"),
    )
    
    link = await registrar.register(body.url, base_url=base_url)
    
    return ShortenResponse(
        code=link.code,
        short_url=link.short_url,
        target_url=link.record.target_url,
        created_at=link.record.created_at,
    )


@router.get(
    "/links/{code}",
    response_model=LinkInfoResponse,
    summary="Get link information",
    description="Get the target URL and creation time of a short code.",
)
async def get_link_info(request: Request, code: str):
    """Get information about a short link."""
    registrar = request.app.state.registrar
    
    record = await registrar.resolve(code)
    
    if record is None:
        raise NotFoundError(f"Short code '{code}' not found")
    
    return LinkInfoResponse(
        code=record.code,
        target_url=record.target_url,
        created_at=record.created_at,
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service and its store are healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    store = request.app.state.store
    
    store_healthy = await store.health_check()
    
    return HealthResponse(
        status="healthy" if store_healthy else "unhealthy",
        store="healthy" if store_healthy else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
