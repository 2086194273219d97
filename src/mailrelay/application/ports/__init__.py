"""Ports consumed by the relay use case."""

from mailrelay.application.ports.block_evaluator import BlockEvaluator
from mailrelay.application.ports.inbound_email import HeaderMap, InboundEmail
from mailrelay.application.ports.mail_cache import MailCache
from mailrelay.application.ports.mail_parser import MailParserStrategy, StrategyLoader
from mailrelay.application.ports.notification_sender import NotificationResult, NotificationSender
from mailrelay.application.ports.status_store import StatusStore

__all__ = [
    "BlockEvaluator",
    "HeaderMap",
    "InboundEmail",
    "MailCache",
    "MailParserStrategy",
    "NotificationResult",
    "NotificationSender",
    "StatusStore",
    "StrategyLoader",
]
