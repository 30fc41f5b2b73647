"""Logging configuration for the short-link proxy.

Plain output:
    2024-01-01 12:00:00 [INFO] proxylink - Created short link: abc123 -> https://...

JSON output (one object per line):
    {"timestamp": "2024-01-01T12:00:00.000Z", "level": "INFO", "logger": "proxylink", "message": "..."}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object."""
    
    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc) \
            .isoformat(timespec="milliseconds") \
            .replace("+00:00", "Z")
        
        log = {
            "timestamp": timestamp,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        
        return json.dumps(log)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """Configure the ``proxylink`` logger.
    
    Args:
        level: Logging level name; unknown names fall back to INFO
        log_file: Optional file that receives the same records as stdout
        json_format: Emit one JSON object per line instead of plain text
        
    Returns:
        Configured logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    
    logger = logging.getLogger("proxylink")
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    
    if json_format:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    
    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    
    return logger


def get_logger(name: str = "proxylink") -> logging.Logger:
    """Return a logger under the ``proxylink`` hierarchy."""
    return logging.getLogger(name)
