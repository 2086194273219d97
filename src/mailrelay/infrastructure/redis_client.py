"""Redis client for delivery status and mail preview storage."""

from typing import Any

from loguru import logger
from redis.asyncio import Redis

from mailrelay.infrastructure.settings import Settings, get_settings


class RedisClientWrapper:
    """Lazily connected async Redis client."""

    def __init__(self, settings: Settings | None = None):
        """Initialize Redis client wrapper."""
        self.settings = settings or get_settings()
        self._client: Redis | None = None

    @property
    def configured(self) -> bool:
        return bool(self.settings.redis_url)

    def connect(self) -> Redis:
        """Create the Redis client (connections are opened on first command)."""
        if self._client is None:
            if not self.settings.redis_url:
                raise RuntimeError("REDIS_URL is not configured")
            logger.info("Connecting to Redis")
            self._client = Redis.from_url(self.settings.redis_url, decode_responses=True)
        return self._client

    async def disconnect(self) -> None:
        """Close Redis connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Redis connection closed")

    @property
    def client(self) -> Redis:
        """Get or create Redis client."""
        if self._client is None:
            return self.connect()
        return self._client

    async def health_check(self) -> dict[str, Any]:
        """Check Redis connection health."""
        if not self.configured:
            return {"status": "disabled"}
        try:
            await self.client.ping()
            return {"status": "healthy"}
        except Exception as e:
            logger.error(f"Redis health check failed: {e}")
            return {"status": "unhealthy", "error": str(e)}


# Singleton instance
_redis_client: RedisClientWrapper | None = None


def get_redis_client() -> RedisClientWrapper:
    """Get singleton Redis client instance."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClientWrapper()
    return _redis_client
