"""Domain models for the mail relay."""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from loguru import logger


class BlockAction(str, Enum):
    """Actions a block policy can suppress for a blocked message."""

    REJECT = "reject"
    FORWARD = "forward"
    TELEGRAM = "telegram"


DEFAULT_BLOCK_POLICY = "telegram"


class BlockPolicy(frozenset):
    """Immutable set of BlockAction values configured per deployment."""

    @classmethod
    def of(cls, actions: Iterable[BlockAction]) -> "BlockPolicy":
        return cls(BlockAction(a) for a in actions)

    @classmethod
    def parse(cls, raw: str | None) -> "BlockPolicy":
        """Parse a comma-separated policy string such as ``"reject,telegram"``.

        Blank tokens are ignored and unknown tokens are logged and dropped.
        An unset or empty value falls back to ``telegram``.
        """
        if not raw or not raw.strip():
            raw = DEFAULT_BLOCK_POLICY

        actions: list[BlockAction] = []
        for token in raw.split(","):
            token = token.strip().lower()
            if not token:
                continue
            try:
                actions.append(BlockAction(token))
            except ValueError:
                logger.warning(f"Ignoring unknown block policy action: {token!r}")
        return cls(actions)

    def suppresses(self, action: BlockAction) -> bool:
        return action in self
