"""Normalize an inbound message into a ParsedMail.

Size handling is decided once against the declared raw size:

- within ``max_size``: the whole stream is read
- over ``max_size`` with ``unhandled``: nothing is read, a notice is returned
- over ``max_size`` with ``truncate``: only the first ``max_size`` bytes are read
- over ``max_size`` with any other policy: the whole stream is read
"""

from __future__ import annotations

import secrets
import string
from enum import Enum
from typing import AsyncIterator, Optional

from loguru import logger

from mailrelay.application.ports.inbound_email import InboundEmail
from mailrelay.application.ports.mail_parser import StrategyLoader
from mailrelay.domain.entities.parsed_mail import ParsedMail
from mailrelay.infrastructure.email.html_text import html_to_text
from mailrelay.infrastructure.email.rfc822 import parse_content

ID_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
MAIL_ID_LENGTH = 32


class MaxSizePolicy(str, Enum):
    UNHANDLED = "unhandled"
    TRUNCATE = "truncate"


class ReadMode(str, Enum):
    UNTRUNCATED = "untruncated"
    TRUNCATED = "truncated"


def random_id(length: int = MAIL_ID_LENGTH) -> str:
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def oversize_notice(raw_size: int, max_size: int) -> str:
    return (
        f"The original size of the email was {raw_size} bytes, "
        f"which exceeds the maximum size of {max_size} bytes."
    )


async def read_stream(stream: AsyncIterator[bytes], size: int) -> bytes:
    """Read at most ``size`` bytes from an async chunk iterator.

    Chunks are copied into a buffer of fixed capacity ``size``; the tail of a
    chunk that would overflow it is dropped and reading stops.
    """
    if size <= 0:
        return b""

    buffer = bytearray(size)
    bytes_read = 0
    with memoryview(buffer) as view:
        async for chunk in stream:
            take = min(len(chunk), size - bytes_read)
            view[bytes_read:bytes_read + take] = chunk[:take]
            bytes_read += take
            if bytes_read >= size:
                break
    return bytes(buffer[:bytes_read])


def _header(message: InboundEmail, name: str) -> Optional[str]:
    value = message.headers.get(name)
    return str(value).strip() if value is not None else None


async def parse_email(
    message: InboundEmail,
    max_size: int,
    max_size_policy: str,
    strategy_loader: Optional[StrategyLoader] = None,
) -> ParsedMail:
    """Parse ``message`` into a ParsedMail. Never raises on bad content."""
    mail = ParsedMail(
        id=random_id(),
        message_id=_header(message, "Message-ID"),
        sender=message.sender,
        recipient=message.recipient,
        subject=_header(message, "Subject"),
    )

    raw_size = message.raw_size
    buffer_size = raw_size
    mode = ReadMode.UNTRUNCATED
    if raw_size > max_size:
        if max_size_policy == MaxSizePolicy.UNHANDLED:
            logger.warning(f"Email {mail.message_id} is {raw_size} bytes, over {max_size}; not parsed")
            mail.text = oversize_notice(raw_size, max_size)
            mail.html = mail.text
            return mail
        if max_size_policy == MaxSizePolicy.TRUNCATE:
            buffer_size = max_size
            mode = ReadMode.TRUNCATED

    try:
        raw = await read_stream(message.raw, buffer_size)
        content = parse_content(raw, strategy_loader)

        if content.html:
            mail.html = content.html
        if content.text:
            mail.text = content.text
        elif content.html:
            mail.text = html_to_text(content.html)

        if mode is ReadMode.TRUNCATED:
            suffix = f"\n\n[Truncated] {oversize_notice(raw_size, max_size)}"
            mail.text = (mail.text or "") + suffix
            logger.info(f"Email {mail.message_id} truncated to {len(raw)} of {raw_size} bytes")
    except Exception as e:
        logger.error(f"Error parsing email {mail.message_id}: {e}")
        mail.text = f"Error parsing email: {e}"
        mail.html = mail.text

    return mail
