"""In-memory stores for development and tests. Nothing survives a restart."""

from __future__ import annotations

import json
import time
from typing import Callable, Optional

from mailrelay.application.ports.mail_cache import MailCache
from mailrelay.application.ports.status_store import StatusStore
from mailrelay.domain.entities.delivery_status import DeliveryStatus
from mailrelay.domain.entities.parsed_mail import ParsedMail

Clock = Callable[[], float]


class _ExpiringDict:
    """JSON values with a per-key deadline, checked lazily on read."""

    def __init__(self, clock: Clock) -> None:
        self._clock = clock
        self._store: dict[str, tuple[str, float]] = {}

    def set(self, key: str, value: dict, ttl_seconds: int) -> None:
        self._store[key] = (json.dumps(value), self._clock() + ttl_seconds)

    def get(self, key: str) -> Optional[dict]:
        entry = self._store.get(key)
        if entry is None:
            return None
        data, expires_at = entry
        if self._clock() > expires_at:
            del self._store[key]
            return None
        return json.loads(data)


class MemoryStatusStore(StatusStore):
    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._store = _ExpiringDict(clock)
        self.saves = 0

    async def load(self, key: str, guardian_mode: bool) -> DeliveryStatus:
        if not guardian_mode:
            return DeliveryStatus()
        data = self._store.get(key)
        return DeliveryStatus.from_dict(data) if data else DeliveryStatus()

    async def save(self, key: str, status: DeliveryStatus, ttl_seconds: int) -> None:
        self._store.set(key, status.to_dict(), ttl_seconds)
        self.saves += 1


class MemoryMailCache(MailCache):
    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._store = _ExpiringDict(clock)

    async def put(self, mail: ParsedMail, ttl_seconds: int) -> None:
        self._store.set(mail.id, mail.to_dict(), ttl_seconds)

    async def get(self, mail_id: str) -> Optional[ParsedMail]:
        data = self._store.get(mail_id)
        return ParsedMail.from_dict(data) if data else None
