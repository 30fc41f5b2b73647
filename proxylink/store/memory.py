"""In-process mapping store."""

import asyncio
import copy
import logging
from typing import Any, AsyncIterator, Dict, Optional, Tuple

from .base import MappingStore


class InMemoryStore(MappingStore):
    """Dictionary-backed store. Contents last for the life of the process."""
    
    def __init__(self, prefix: str = "proxy", logger: Optional[logging.Logger] = None):
        super().__init__(prefix=prefix, logger=logger)
        self._data: Dict[str, Any] = {}
        self._lock = asyncio.Lock()
    
    async def _read(self, key: str) -> Any:
        async with self._lock:
            return copy.deepcopy(self._data.get(key))
    
    async def _write(self, key: str, value: dict) -> None:
        async with self._lock:
            self._data[key] = copy.deepcopy(value)
    
    async def _scan(self) -> AsyncIterator[Tuple[str, Any]]:
        marker = f"{self.prefix}:"
        async with self._lock:
            items = [
                (key, copy.deepcopy(value))
                for key, value in sorted(self._data.items())
                if key.startswith(marker)
            ]
        for key, value in items:
            yield key, value
    
    async def put_raw(self, code: str, value: Any) -> None:
        """Store an arbitrary value for a code, bypassing the record schema.
        
        Used to seed legacy or hand-written data.
        """
        await self._write(self.key_for(code), value)
    
    async def health_check(self) -> bool:
        return True
    
    async def close(self) -> None:
        self.logger.debug("In-memory store closed")
