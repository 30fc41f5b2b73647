"""Abstract base class for mapping store implementations."""

import logging
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Optional, Tuple

from .models import ShortLinkRecord, InvalidRecordError


class MappingStore(ABC):
    """Key-value store for short link records.
    
    All keys live in one namespace (``<prefix>:<code>``). Subclasses only
    move raw values in and out; schema checks happen here so every backend
    validates records the same way on read.
    """
    
    def __init__(self, prefix: str = "proxy", logger: Optional[logging.Logger] = None):
        """Initialize store.
        
        Args:
            prefix: Key namespace
            logger: Optional logger instance
        """
        self.prefix = prefix
        self.logger = logger or logging.getLogger(__name__)
    
    def key_for(self, code: str) -> str:
        """Build the namespaced key for a code."""
        return f"{self.prefix}:{code}"
    
    def code_from_key(self, key: str) -> str:
        """Strip the namespace from a key."""
        return key[len(self.prefix) + 1:]
    
    async def get(self, code: str) -> Optional[ShortLinkRecord]:
        """Get the record for a short code.
        
        Args:
            code: The short code to lookup
            
        Returns:
            The record if found, None otherwise
            
        Raises:
            InvalidRecordError: If the stored value fails schema checks
        """
        value = await self._read(self.key_for(code))
        if value is None:
            return None
        return ShortLinkRecord.from_value(code, value)
    
    async def exists(self, code: str) -> bool:
        """Check if a short code is already in use."""
        return await self._read(self.key_for(code)) is not None
    
    async def set(self, record: ShortLinkRecord) -> None:
        """Write a record, overwriting any existing value for its code.
        
        Args:
            record: The record to store
        """
        await self._write(self.key_for(record.code), record.to_value())
    
    async def list(self) -> AsyncIterator[ShortLinkRecord]:
        """Iterate over all records in key order.
        
        Values that fail schema checks are skipped.
        """
        async for key, value in self._scan():
            code = self.code_from_key(key)
            try:
                yield ShortLinkRecord.from_value(code, value)
            except InvalidRecordError as e:
                self.logger.warning(f"Skipping malformed record: {e}")
    
    @abstractmethod
    async def _read(self, key: str) -> Any:
        """Return the decoded value for a key, or None."""
        pass
    
    @abstractmethod
    async def _write(self, key: str, value: dict) -> None:
        """Store a value under a key."""
        pass
    
    @abstractmethod
    def _scan(self) -> AsyncIterator[Tuple[str, Any]]:
        """Yield (key, decoded value) pairs under the prefix, ordered by key."""
        pass
    
    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.
        
        Returns:
            True if healthy, False otherwise
        """
        pass
    
    @abstractmethod
    async def close(self) -> None:
        """Release any underlying connection."""
        pass
