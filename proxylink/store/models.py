"""Data models for the mapping store."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from ..common.validators import TARGET_URL_PATTERN


class InvalidRecordError(ValueError):
    """Raised when a stored value does not match the record schema."""


@dataclass(frozen=True)
class ShortLinkRecord:
    """Represents a code -> target URL mapping."""
    
    code: str
    target_url: str
    created_at: datetime
    
    def to_value(self) -> dict:
        """Convert to the stored value shape ({"url", "created" in epoch ms})."""
        return {
            "url": self.target_url,
            "created": int(self.created_at.timestamp() * 1000),
        }
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "code": self.code,
            "target_url": self.target_url,
            "created_at": self.created_at.isoformat(),
        }
    
    @property
    def has_valid_target(self) -> bool:
        return bool(TARGET_URL_PATTERN.match(self.target_url))
    
    @classmethod
    def from_value(cls, code: str, value: Any) -> "ShortLinkRecord":
        """Create from a stored value, checking its shape.
        
        Args:
            code: The key the value was stored under
            value: Decoded stored value
            
        Returns:
            ShortLinkRecord
            
        Raises:
            InvalidRecordError: If the value does not match the schema
        """
        if not isinstance(value, dict):
            raise InvalidRecordError(f"Record for '{code}' is not a mapping")
        
        url = value.get("url")
        if not isinstance(url, str) or not url:
            raise InvalidRecordError(f"Record for '{code}' has no url")
        
        created = value.get("created", 0)
        if isinstance(created, bool) or not isinstance(created, (int, float)):
            raise InvalidRecordError(f"Record for '{code}' has a malformed created timestamp")
        
        return cls(
            code=code,
            target_url=url,
            created_at=datetime.fromtimestamp(created / 1000, tz=timezone.utc),
        )
