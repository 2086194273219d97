"""Parser strategies over RFC 822 bytes, backed by the stdlib ``email`` package."""

from __future__ import annotations

import importlib
from email import policy
from email.message import Message
from email.parser import BytesParser
from typing import Optional

from loguru import logger

from mailrelay.application.ports.mail_parser import MailParserStrategy, StrategyLoader
from mailrelay.domain.entities.parsed_mail import MailContent


class StdlibMimeStrategy:
    """Baseline parser: ``email.policy.default`` with body preference lookup."""

    name = "stdlib-email"

    def parse(self, raw: bytes) -> MailContent:
        em = BytesParser(policy=policy.default).parsebytes(raw)
        return MailContent(text=_preferred_body(em, "plain"), html=_preferred_body(em, "html"))


def _preferred_body(em, subtype: str) -> Optional[str]:
    part = em.get_body(preferencelist=(subtype,))
    if part is None:
        return None
    try:
        content = part.get_content()
    except LookupError:
        # unregistered charset label such as unknown-8bit
        return _decode_payload(part)
    return content if isinstance(content, str) else None


class Compat32Strategy:
    """Lightweight parser on the compat32 policy.

    Skips structured header parsing and walks the leaf parts once, keeping the
    first inline text/plain and text/html bodies.
    """

    name = "compat32"

    def parse(self, raw: bytes) -> MailContent:
        em = BytesParser(policy=policy.compat32).parsebytes(raw)
        text: Optional[str] = None
        html: Optional[str] = None
        for part in em.walk():
            if part.is_multipart():
                continue
            disp = (part.get("Content-Disposition") or "").lower()
            if disp.startswith("attachment"):
                continue

            ctype = part.get_content_type()
            if ctype == "text/plain" and text is None:
                text = _decode_payload(part)
            elif ctype == "text/html" and html is None:
                html = _decode_payload(part)
        return MailContent(text=text, html=html)


def _decode_payload(part: Message) -> str:
    payload = part.get_payload(decode=True) or b""
    charset = part.get_content_charset() or "utf-8"
    try:
        return payload.decode(charset, errors="replace")
    except LookupError:
        # unknown charset label
        return payload.decode("utf-8", errors="replace")


def create_compat32_strategy() -> MailParserStrategy:
    return Compat32Strategy()


def import_strategy_loader(path: str) -> StrategyLoader:
    """Build a loader for ``"package.module:factory"``.

    The import is deferred until the loader is called, so a missing module
    shows up as a loader failure at parse time.
    """
    module_name, _, attr = path.partition(":")
    if not module_name:
        raise ValueError(f"Invalid parser plugin path: {path!r}")

    def _load() -> MailParserStrategy:
        module = importlib.import_module(module_name)
        factory = getattr(module, attr or "create_strategy")
        return factory()

    return _load


def parse_content(raw: bytes, strategy_loader: Optional[StrategyLoader] = None) -> MailContent:
    """Run the alternate strategy (if any), then fall back to the baseline.

    Failures of the alternate strategy or its loader are logged and skipped.
    The baseline always gets its turn and its errors propagate.
    """
    strategies: list[MailParserStrategy] = []
    if strategy_loader is not None:
        try:
            strategies.append(strategy_loader())
        except Exception as e:
            logger.error(f"Error loading alternate mail parser: {e}")

    for strategy in strategies:
        try:
            return strategy.parse(raw)
        except Exception as e:
            logger.error(f"Error parsing email with {getattr(strategy, 'name', strategy)}: {e}")

    return StdlibMimeStrategy().parse(raw)
