"""Pytest configuration and fixtures."""

from typing import AsyncGenerator, Callable, List

import httpx
import pytest

from config import Config
from proxylink.registrar import LinkRegistrar
from proxylink.relay import ProxyRelay
from proxylink.shortcode import ShortCodeGenerator
from proxylink.store import InMemoryStore
from proxylink.common.logging_config import setup_logging
from proxylink_web import create_app


class FakeUpstream:
    """Records upstream requests and answers them with a configurable responder."""
    
    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(
                200,
                content=b"hello from upstream",
                headers={"Content-Type": "text/plain"},
            )
        )
    
    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store(logger) -> InMemoryStore:
    """Create empty in-memory store."""
    return InMemoryStore(logger=logger)


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def registrar(store, short_code_generator, logger) -> LinkRegistrar:
    """Create registrar instance."""
    return LinkRegistrar(
        store=store,
        generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    """Fake upstream origin."""
    return FakeUpstream()


@pytest.fixture
async def http_client(upstream) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Upstream HTTP client wired to the fake origin."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler)) as client:
        yield client


@pytest.fixture
def relay(store, http_client, logger) -> ProxyRelay:
    """Create relay instance."""
    return ProxyRelay(store=store, http_client=http_client, logger=logger)


@pytest.fixture
def config() -> Config:
    """Test configuration."""
    return Config(base_url="http://testserver")


@pytest.fixture
def app(store, registrar, relay, config):
    """Create test FastAPI app."""
    return create_app(
        store=store,
        registrar=registrar,
        relay=relay,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/video.mp4",
        "http://media.example.org/audio.ogg",
        "https://cdn.example.net/files/archive.zip?token=abc",
    ]
