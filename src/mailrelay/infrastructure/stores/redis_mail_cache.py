"""Redis-backed cache of parsed mails for the preview endpoint."""

from __future__ import annotations

import json
from typing import Optional

from loguru import logger
from redis.asyncio import Redis

from mailrelay.application.ports.mail_cache import MailCache
from mailrelay.domain.entities.parsed_mail import ParsedMail

MAIL_PREFIX = "mailrelay:mail:"


class RedisMailCache(MailCache):
    def __init__(self, client: Redis):
        self.client = client

    async def put(self, mail: ParsedMail, ttl_seconds: int) -> None:
        await self.client.set(f"{MAIL_PREFIX}{mail.id}", json.dumps(mail.to_dict()), ex=ttl_seconds)

    async def get(self, mail_id: str) -> Optional[ParsedMail]:
        raw = await self.client.get(f"{MAIL_PREFIX}{mail_id}")
        if not raw:
            return None
        try:
            return ParsedMail.from_dict(json.loads(raw))
        except (TypeError, ValueError, KeyError) as e:
            logger.warning(f"Unreadable cached mail {mail_id}: {e}")
            return None
