from __future__ import annotations
from typing import Protocol
from mailrelay.domain.entities.delivery_status import DeliveryStatus

class StatusStore(Protocol):
    async def load(self, key: str, guardian_mode: bool) -> DeliveryStatus: ...
    async def save(self, key: str, status: DeliveryStatus, ttl_seconds: int) -> None: ...
