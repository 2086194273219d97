from __future__ import annotations
from typing import Protocol
from mailrelay.application.ports.inbound_email import InboundEmail

class BlockEvaluator(Protocol):
    async def evaluate(self, message: InboundEmail) -> bool: ...
