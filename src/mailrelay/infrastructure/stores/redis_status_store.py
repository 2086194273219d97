"""Redis-backed delivery status store."""

from __future__ import annotations

import json

from loguru import logger
from redis.asyncio import Redis

from mailrelay.application.ports.status_store import StatusStore
from mailrelay.domain.entities.delivery_status import DeliveryStatus

STATUS_PREFIX = "mailrelay:status:"


class RedisStatusStore(StatusStore):
    """Keep one JSON status record per Message-ID, expired by Redis TTL."""

    def __init__(self, client: Redis):
        self.client = client

    def _key(self, key: str) -> str:
        return f"{STATUS_PREFIX}{key}"

    async def load(self, key: str, guardian_mode: bool) -> DeliveryStatus:
        """Load status for a message; fresh record outside guardian mode."""
        if not guardian_mode:
            return DeliveryStatus()

        raw = await self.client.get(self._key(key))
        if not raw:
            logger.debug(f"No delivery status found for {key}")
            return DeliveryStatus()

        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"Unreadable delivery status for {key}, starting fresh: {e}")
            return DeliveryStatus()
        if not isinstance(data, dict):
            logger.warning(f"Unexpected delivery status payload for {key}, starting fresh")
            return DeliveryStatus()

        return DeliveryStatus.from_dict(data)

    async def save(self, key: str, status: DeliveryStatus, ttl_seconds: int) -> None:
        """Save status for a message with the given TTL."""
        await self.client.set(self._key(key), json.dumps(status.to_dict()), ex=ttl_seconds)
        logger.debug(f"Saved delivery status for {key}: {status.to_dict()}")
