from __future__ import annotations
from typing import Callable, Protocol
from mailrelay.domain.entities.parsed_mail import MailContent

class MailParserStrategy(Protocol):
    name: str

    def parse(self, raw: bytes) -> MailContent: ...

# Returns a ready strategy; may raise if the backing parser is unavailable
StrategyLoader = Callable[[], MailParserStrategy]
