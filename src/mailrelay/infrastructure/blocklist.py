"""Block evaluation from sender/recipient pattern lists."""

from __future__ import annotations

import re
from typing import Iterable, Optional

from loguru import logger

from mailrelay.application.ports.block_evaluator import BlockEvaluator
from mailrelay.application.ports.inbound_email import InboundEmail


def split_list(raw: Optional[str]) -> list[str]:
    """Split a comma-separated setting, dropping blanks."""
    return [x.strip() for x in (raw or "").split(",") if x.strip()]


class AddressPattern:
    """Case-insensitive exact match, or a regular expression searched in the address."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        self._regex: Optional[re.Pattern[str]]
        try:
            self._regex = re.compile(pattern, re.IGNORECASE)
        except re.error as e:
            logger.warning(f"Block list pattern {pattern!r} is not a valid regex, matching literally: {e}")
            self._regex = None

    def matches(self, address: str) -> bool:
        if address.lower() == self.pattern.lower():
            return True
        return bool(self._regex and self._regex.search(address))


class PatternBlockEvaluator(BlockEvaluator):
    """Blocked when sender or recipient hits the block list and neither hits the white list."""

    def __init__(self, block_list: Iterable[str] = (), white_list: Iterable[str] = ()):
        self.block_list = [AddressPattern(p) for p in block_list]
        self.white_list = [AddressPattern(p) for p in white_list]

    @classmethod
    def from_settings(cls, settings) -> "PatternBlockEvaluator":
        return cls(split_list(settings.block_list), split_list(settings.white_list))

    @staticmethod
    def _candidates(message: InboundEmail) -> list[str]:
        return [a for a in (message.sender, message.recipient) if a]

    async def evaluate(self, message: InboundEmail) -> bool:
        candidates = self._candidates(message)

        for address in candidates:
            if any(p.matches(address) for p in self.white_list):
                return False

        for address in candidates:
            for pattern in self.block_list:
                if pattern.matches(address):
                    logger.info(f"Address {address} matched block pattern {pattern.pattern!r}")
                    return True
        return False
