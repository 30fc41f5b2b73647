"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime

from proxylink.common.validators import is_valid_target_url


class ShortenRequest(BaseModel):
    """Request to create a short link."""
    
    url: str = Field(..., description="The target URL to proxy")
    
    @field_validator('url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        is_valid, error = is_valid_target_url(v)
        if not is_valid:
            raise ValueError(error)
        return v
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/video.mp4"},
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after creating a short link."""
    
    code: str = Field(..., description="The generated short code")
    short_url: str = Field(..., description="The complete short URL")
    target_url: str = Field(..., description="The proxied target URL")
    created_at: datetime = Field(..., description="Creation timestamp")
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": "abc123",
                    "short_url": "https://short.link/p/abc123",
                    "target_url": "https://example.com/video.mp4",
                    "created_at": "2024-01-01T12:00:00Z"
                }
            ]
        }
    }


class LinkInfoResponse(BaseModel):
    """Response with short link information."""
    
    code: str
    target_url: str
    created_at: datetime


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(..., description="Overall status")
    store: str = Field(..., description="Mapping store status")
    timestamp: datetime = Field(..., description="Check timestamp")
