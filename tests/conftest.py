"""Shared fixtures for the mailrelay test suite."""

from __future__ import annotations

from email.message import EmailMessage
from typing import AsyncIterator, Optional

import pytest


def build_raw_email(
    subject: str = "Hello",
    text: Optional[str] = "Plain body",
    html: Optional[str] = None,
    message_id: Optional[str] = "<abc123@example.com>",
    sender: str = "alice@example.com",
    to: str = "relay@example.com",
) -> bytes:
    """Build RFC 822 bytes with a text and/or HTML body."""
    msg = EmailMessage()
    msg["From"] = sender
    msg["To"] = to
    msg["Subject"] = subject
    if message_id:
        msg["Message-ID"] = message_id

    if text is not None and html is not None:
        msg.set_content(text)
        msg.add_alternative(html, subtype="html")
    elif html is not None:
        msg.set_content(html, subtype="html")
    else:
        msg.set_content(text or "")
    return msg.as_bytes()


class TrackingMessage:
    """InboundEmail over fixed bytes that records how much of the stream was consumed."""

    def __init__(
        self,
        payload: bytes,
        raw_size: Optional[int] = None,
        headers: Optional[dict] = None,
        chunk_size: int = 64,
    ) -> None:
        self.payload = payload
        self.raw_size = len(payload) if raw_size is None else raw_size
        if headers is None:
            headers = {"Message-ID": "<tracking@example.com>", "Subject": "Tracked"}
        self.headers = headers
        self.sender = "alice@example.com"
        self.recipient = "relay@example.com"
        self.chunk_size = chunk_size
        self.stream_opened = False
        self.bytes_yielded = 0

    @property
    def raw(self) -> AsyncIterator[bytes]:
        self.stream_opened = True
        return self._chunks()

    async def _chunks(self) -> AsyncIterator[bytes]:
        for start in range(0, len(self.payload), self.chunk_size):
            chunk = self.payload[start:start + self.chunk_size]
            self.bytes_yielded += len(chunk)
            yield chunk

    async def forward(self, address: str) -> None:
        raise AssertionError("forward not expected")

    def set_reject(self, reason: str) -> None:
        raise AssertionError("set_reject not expected")


@pytest.fixture
def raw_email() -> bytes:
    return build_raw_email()
