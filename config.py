"""Configuration management for the short-link proxy."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""
    
    # Store settings
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL for the mapping store (in-memory store if unset)"
    )
    
    store_prefix: str = Field(
        default="proxy",
        description="Key namespace for short link records"
    )
    
    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )
    
    port: int = Field(
        default=9200,
        description="Port to listen on"
    )
    
    # Short link settings
    base_url: str = Field(
        default="http://localhost:9200",
        description="Base URL for short links when the request carries no Host header"
    )
    
    short_url_scheme: str = Field(
        default="https",
        description="Scheme used for short URLs built from the request Host header"
    )
    
    short_code_length: int = Field(
        default=6,
        ge=1,
        description="Length of generated short codes"
    )
    
    max_collision_retries: int = Field(
        default=20,
        ge=1,
        description="Maximum candidate codes tried per registration"
    )
    
    fail_on_exhausted_codes: bool = Field(
        default=False,
        description="Fail the registration instead of reusing the last candidate when all retries collide"
    )
    
    # Upstream settings
    upstream_connect_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Upstream connect timeout in seconds"
    )
    
    upstream_read_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Upstream read timeout in seconds (between chunks)"
    )
    
    upstream_user_agent: str = Field(
        default="Mozilla/5.0 (compatible; ProxyLink/1.0)",
        description="User-Agent sent to upstream origins"
    )
    
    # Landing page
    landing_page_path: Optional[str] = Field(
        default=None,
        description="HTML file served at / (plain text usage notes if unset)"
    )
    
    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    
    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )
    
    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )
    
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
