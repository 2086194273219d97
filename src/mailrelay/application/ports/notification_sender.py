from __future__ import annotations
from dataclasses import dataclass, field
from typing import Protocol
from mailrelay.application.ports.inbound_email import InboundEmail

@dataclass
class NotificationResult:
    success: bool
    sent: int = 0
    errors: list[str] = field(default_factory=list)

class NotificationSender(Protocol):
    async def send(self, message: InboundEmail) -> NotificationResult: ...
