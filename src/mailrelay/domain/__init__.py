"""Domain models and entities."""

from mailrelay.domain.entities import DeliveryStatus, MailContent, ParsedMail
from mailrelay.domain.models import BlockAction, BlockPolicy

__all__ = [
    "BlockAction",
    "BlockPolicy",
    "DeliveryStatus",
    "MailContent",
    "ParsedMail",
]
