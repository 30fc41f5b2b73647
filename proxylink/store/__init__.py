"""Mapping store layer."""

from .base import MappingStore
from .memory import InMemoryStore
from .redis_store import RedisStore
from .models import ShortLinkRecord, InvalidRecordError

__all__ = ["MappingStore", "InMemoryStore", "RedisStore", "ShortLinkRecord", "InvalidRecordError"]
