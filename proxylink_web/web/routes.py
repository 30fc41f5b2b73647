"""Plain-text routes: landing page, link creation, listing and the proxy itself."""

import os
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from starlette.background import BackgroundTask
from starlette.responses import StreamingResponse

from proxylink.common.headers import build_base_url

router = APIRouter()

LANDING_TEXT = (
    "Proxy Shortlink\n\n"
    "Create: /new?url=<encoded url>\n"
    "Use proxied URL: /p/<code>"
)


def _base_url_from_request(request: Request) -> str:
    config = request.app.state.config
    return build_base_url(
        headers=dict(request.headers),
        fallback_base_url=config.base_url,
        scheme=config.short_url_scheme,
        request_host=request.headers.get("host"),
    )


@router.get("/", include_in_schema=False)
async def homepage(request: Request):
    """Serve the landing page: HTML when configured, plain usage notes otherwise."""
    html_file = request.app.state.config.landing_page_path

    if html_file and os.path.exists(html_file):
        with open(html_file, "r", encoding="utf-8") as f:
            return HTMLResponse(content=f.read())

    return PlainTextResponse(LANDING_TEXT)


@router.get("/new", include_in_schema=False)
async def create_link(request: Request, url: Optional[str] = None):
    """Create a short link: /new?url=https://..."""
    registrar = request.app.state.registrar

    link = await registrar.register(url, base_url=_base_url_from_request(request))

    return PlainTextResponse(link.short_url)


# Diagnostic listing. Meant for admins, but nothing enforces that.
@router.get("/list", include_in_schema=False)
async def list_links(request: Request):
    """List every mapping as '<code> -> <url>' lines."""
    store = request.app.state.store

    lines = [f"{record.code} -> {record.target_url}" async for record in store.list()]

    return PlainTextResponse("\n".join(lines) or "No links")


@router.get("/health", include_in_schema=False)
async def health_check_web(request: Request):
    """Health check endpoint (simple version for load balancers)."""
    store = request.app.state.store

    if await store.health_check():
        return PlainTextResponse("ok")
    return PlainTextResponse("unhealthy", status_code=503)


@router.get("/p/{path:path}", include_in_schema=False)
async def proxy_link(request: Request, path: str):
    """Stream the target of a short code. Only the first segment after /p/ is the code."""
    relay = request.app.state.relay

    code = path.split("/")[0]
    relayed = await relay.relay(code, range_header=request.headers.get("range"))

    return StreamingResponse(
        relayed.body,
        status_code=relayed.status_code,
        headers=relayed.headers,
        background=BackgroundTask(relayed.aclose),
    )
