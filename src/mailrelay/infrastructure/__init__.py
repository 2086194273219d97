# src/mailrelay/infrastructure/__init__.py
"""Infrastructure layer - parsing, stores, notification and configuration."""

from mailrelay.infrastructure.logging_config import configure_logging
from mailrelay.infrastructure.redis_client import RedisClientWrapper, get_redis_client
from mailrelay.infrastructure.settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
    # Redis
    "RedisClientWrapper",
    "get_redis_client",
]
