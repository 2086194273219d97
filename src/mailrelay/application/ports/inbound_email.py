from __future__ import annotations
from typing import AsyncIterator, Optional, Protocol

class HeaderMap(Protocol):
    def get(self, name: str, default: Optional[str] = None) -> Optional[str]: ...

class InboundEmail(Protocol):
    # Handed over by the hosting runtime, one per delivery attempt
    headers: HeaderMap
    sender: str
    recipient: str
    raw_size: int

    @property
    def raw(self) -> AsyncIterator[bytes]: ...

    async def forward(self, address: str) -> None: ...

    def set_reject(self, reason: str) -> None: ...
