"""Telegram notification channel."""

from mailrelay.infrastructure.telegram.sender import (
    TelegramNotificationSender,
    get_telegram_sender,
    render_summary,
)

__all__ = [
    "TelegramNotificationSender",
    "get_telegram_sender",
    "render_summary",
]
