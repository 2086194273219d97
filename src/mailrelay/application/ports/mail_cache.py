from __future__ import annotations
from typing import Optional, Protocol
from mailrelay.domain.entities.parsed_mail import ParsedMail

class MailCache(Protocol):
    async def put(self, mail: ParsedMail, ttl_seconds: int) -> None: ...
    async def get(self, mail_id: str) -> Optional[ParsedMail]: ...
