"""InboundEmail backed by an in-memory RFC 822 payload."""

from __future__ import annotations

from email import policy
from email.parser import BytesHeaderParser
from email.utils import parseaddr
from typing import AsyncIterator, Awaitable, Callable, Optional

Forwarder = Callable[["RawInboundEmail", str], Awaitable[None]]


class RawInboundEmail:
    """Wrap raw message bytes in the interface the relay expects.

    ``forward`` is delegated to ``forwarder``; without one, forwarding raises.
    ``set_reject`` only records the reason for the caller to act on.
    """

    def __init__(
        self,
        rfc822_bytes: bytes,
        sender: Optional[str] = None,
        recipient: Optional[str] = None,
        forwarder: Optional[Forwarder] = None,
        chunk_size: int = 64 * 1024,
    ) -> None:
        self._raw = rfc822_bytes
        self._forwarder = forwarder
        self._chunk_size = chunk_size

        self.headers = BytesHeaderParser(policy=policy.default).parsebytes(rfc822_bytes)
        self.sender = sender or parseaddr(str(self.headers.get("From") or ""))[1]
        self.recipient = recipient or parseaddr(str(self.headers.get("To") or ""))[1]
        self.raw_size = len(rfc822_bytes)

        self.forwarded: list[str] = []
        self.reject_reason: Optional[str] = None

    @property
    def raw(self) -> AsyncIterator[bytes]:
        return self._chunks()

    async def _chunks(self) -> AsyncIterator[bytes]:
        for start in range(0, len(self._raw), self._chunk_size):
            yield self._raw[start:start + self._chunk_size]

    @property
    def rejected(self) -> bool:
        return self.reject_reason is not None

    async def forward(self, address: str) -> None:
        if self._forwarder is None:
            raise RuntimeError(f"No forwarder configured, cannot forward to {address}")
        await self._forwarder(self, address)
        self.forwarded.append(address)

    def set_reject(self, reason: str) -> None:
        self.reject_reason = reason
