"""Redis mapping store."""

import json
import logging
from typing import Any, AsyncIterator, Optional, Tuple

import redis.asyncio as redis

from .base import MappingStore


class RedisStore(MappingStore):
    """Redis-backed store. Each record is a JSON string under ``<prefix>:<code>``."""
    
    def __init__(
        self,
        redis_url: Optional[str] = None,
        prefix: str = "proxy",
        client: Optional[redis.Redis] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis store.
        
        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            prefix: Key namespace
            client: Pre-built client (takes precedence over redis_url)
            logger: Optional logger instance
        """
        super().__init__(prefix=prefix, logger=logger)
        if client is None and not redis_url:
            raise ValueError("Either redis_url or client is required")
        self.redis_url = redis_url
        self.client: Optional[redis.Redis] = client
    
    async def connect(self) -> None:
        """Connect to Redis."""
        if self.client is None:
            self.client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        await self.client.ping()
        self.logger.info("Connected to Redis")
    
    def _decode(self, raw: Optional[str]) -> Any:
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            # Left as a string; the record schema rejects it on read
            return raw
    
    async def _read(self, key: str) -> Any:
        return self._decode(await self.client.get(key))
    
    async def _write(self, key: str, value: dict) -> None:
        await self.client.set(key, json.dumps(value))
    
    async def _scan(self) -> AsyncIterator[Tuple[str, Any]]:
        keys = sorted([key async for key in self.client.scan_iter(match=f"{self.prefix}:*")])
        for key in keys:
            raw = await self.client.get(key)
            # Key may have vanished between scan and get
            if raw is None:
                continue
            yield key, self._decode(raw)
    
    async def health_check(self) -> bool:
        try:
            return bool(await self.client.ping())
        except redis.RedisError as e:
            self.logger.error(f"Redis health check failed: {e}")
            return False
    
    async def close(self) -> None:
        if self.client:
            await self.client.aclose()
            self.logger.info("Redis connection closed")
