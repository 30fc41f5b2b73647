#!/usr/bin/env python3
"""
Main entry point for the short-link proxy service.

Concurrency: each request runs as its own task on the event loop (FastAPI +
httpx + redis.asyncio). Relayed bodies are streamed chunk by chunk, so a slow
download only holds its own connection. The server runs a single process;
scale out by running several instances against the same REDIS_URL.

Usage:
    python app.py

Environment variables:
    REDIS_URL - Redis connection URL (optional, in-memory store if unset)
    BASE_URL - Fallback base URL for short links
    PORT - Port to listen on
    UPSTREAM_CONNECT_TIMEOUT / UPSTREAM_READ_TIMEOUT - Upstream timeouts (seconds)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI

from config import load_config
from proxylink.registrar import LinkRegistrar
from proxylink.relay import ProxyRelay
from proxylink.shortcode import ShortCodeGenerator
from proxylink.store import InMemoryStore, RedisStore
from proxylink.common.logging_config import setup_logging
from proxylink_web import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger
    
    logger.info("Starting proxy shortlink service...")
    
    if config.redis_url:
        logger.info(f"Connecting to Redis at {config.redis_url}")
        store = RedisStore(redis_url=config.redis_url, prefix=config.store_prefix, logger=logger)
        await store.connect()
    else:
        logger.info("REDIS_URL not set, using in-memory store")
        store = InMemoryStore(prefix=config.store_prefix, logger=logger)
    
    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(
            config.upstream_read_timeout,
            connect=config.upstream_connect_timeout,
        ),
    )
    
    app.state.store = store
    app.state.registrar = LinkRegistrar(
        store=store,
        generator=ShortCodeGenerator(default_length=config.short_code_length),
        logger=logger,
        max_attempts=config.max_collision_retries,
        fail_on_exhaustion=config.fail_on_exhausted_codes,
    )
    app.state.relay = ProxyRelay(
        store=store,
        http_client=http_client,
        logger=logger,
        user_agent=config.upstream_user_agent,
    )
    
    logger.info("Service started successfully")
    
    yield
    
    logger.info("Shutting down proxy shortlink service...")
    await http_client.aclose()
    await store.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()
    
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )
    
    logger.info("Proxy Shortlink Service")
    logger.info(f"Configuration: {config.model_dump()}")
    
    # Store, registrar and relay are created in lifespan
    app = create_app(
        store=None,
        registrar=None,
        relay=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan
    
    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=True,
    )
    
    server = uvicorn.Server(uvicorn_config)
    
    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True
    
    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)
    
    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
