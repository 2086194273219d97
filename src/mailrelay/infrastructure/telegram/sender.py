"""Telegram notification sender for relayed emails."""

from __future__ import annotations

from typing import Any, Optional

import httpx
from loguru import logger

from mailrelay.application.ports.inbound_email import InboundEmail
from mailrelay.application.ports.mail_cache import MailCache
from mailrelay.application.ports.mail_parser import StrategyLoader
from mailrelay.application.ports.notification_sender import NotificationResult, NotificationSender
from mailrelay.domain.entities.parsed_mail import ParsedMail
from mailrelay.infrastructure.email.parser import parse_email

# Bot API hard limit on message text
MAX_MESSAGE_LENGTH = 4096


def render_summary(mail: ParsedMail) -> str:
    return (
        f"{mail.subject or ''}\n\n-----------\n"
        f"From\t:\t{mail.sender or ''}\nTo\t\t:\t{mail.recipient or ''}"
    )


class TelegramNotificationSender(NotificationSender):
    """Parse the inbound email, cache it for preview and post a summary to each chat."""

    def __init__(
        self,
        token: str,
        chat_ids: list[str],
        mail_cache: MailCache,
        max_email_size: int = 512 * 1024,
        max_email_size_policy: str = "truncate",
        mail_ttl: int = 60 * 60 * 24,
        domain: str | None = None,
        strategy_loader: Optional[StrategyLoader] = None,
        api_base: str = "https://api.telegram.org",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.token = token
        self.chat_ids = chat_ids
        self.mail_cache = mail_cache
        self.max_email_size = max_email_size
        self.max_email_size_policy = max_email_size_policy
        self.mail_ttl = mail_ttl
        self.domain = domain
        self.strategy_loader = strategy_loader
        self.api_base = api_base.rstrip("/")
        self._transport = transport

    def _render(self, mail: ParsedMail) -> dict[str, Any]:
        text = render_summary(mail)
        payload: dict[str, Any] = {"disable_web_page_preview": True}

        if self.domain:
            base = f"https://{self.domain}/email/{mail.id}"
            payload["reply_markup"] = {
                "inline_keyboard": [[
                    {"text": "Preview", "url": f"{base}?mode=text"},
                    {"text": "HTML", "url": f"{base}?mode=html"},
                ]]
            }
        elif mail.text:
            # No preview host, so the body goes inline
            text = f"{text}\n\n{mail.text}"

        if len(text) > MAX_MESSAGE_LENGTH:
            text = text[:MAX_MESSAGE_LENGTH - 3] + "..."
            logger.warning(f"Telegram message truncated to {MAX_MESSAGE_LENGTH} chars for {mail.message_id}")
        payload["text"] = text
        return payload

    async def send(self, message: InboundEmail) -> NotificationResult:
        """Notify every configured chat about ``message``.

        A missing token or chat list is reported in the result, never raised.
        """
        if not self.token:
            return NotificationResult(success=False, errors=["TELEGRAM_TOKEN not configured"])
        if not self.chat_ids:
            return NotificationResult(success=False, errors=["No Telegram chat configured"])

        mail = await parse_email(
            message,
            self.max_email_size,
            self.max_email_size_policy,
            self.strategy_loader,
        )
        await self.mail_cache.put(mail, self.mail_ttl)

        payload = self._render(mail)
        result = NotificationResult(success=True)
        async with httpx.AsyncClient(transport=self._transport) as client:
            for chat_id in self.chat_ids:
                error = await self._send_message(client, {**payload, "chat_id": chat_id})
                if error:
                    result.errors.append(f"{chat_id}: {error}")
                else:
                    result.sent += 1

        result.success = not result.errors
        return result

    async def _send_message(self, client: httpx.AsyncClient, payload: dict[str, Any]) -> str | None:
        """Post one message. Returns an error string, or None on success."""
        chat_id = payload["chat_id"]
        try:
            response = await client.post(
                f"{self.api_base}/bot{self.token}/sendMessage",
                json=payload,
                timeout=30.0,
            )
        except httpx.TimeoutException:
            logger.error(f"Telegram API timeout sending to {chat_id}")
            return "Request timeout"
        except httpx.HTTPError as e:
            logger.error(f"Telegram API exception: {e}")
            return str(e)

        if response.status_code == 200:
            logger.info(f"Telegram message sent to {chat_id}")
            return None

        error_text = response.text
        logger.error(f"Telegram API error {response.status_code}: {error_text}")
        return f"HTTP {response.status_code}: {error_text[:200]}"


# Singleton instance
_sender: TelegramNotificationSender | None = None


def get_telegram_sender() -> TelegramNotificationSender:
    """Get or create Telegram sender singleton from settings."""
    global _sender
    if _sender is None:
        from mailrelay.infrastructure.email.rfc822 import import_strategy_loader
        from mailrelay.infrastructure.settings import get_settings
        from mailrelay.infrastructure.stores import get_mail_cache

        settings = get_settings()
        loader = import_strategy_loader(settings.mail_parser_plugin) if settings.mail_parser_plugin else None
        token = settings.telegram_token.get_secret_value() if settings.telegram_token else ""
        if not token:
            logger.warning("TELEGRAM_TOKEN not set, notifications disabled")
        _sender = TelegramNotificationSender(
            token=token,
            chat_ids=settings.telegram_chat_ids,
            mail_cache=get_mail_cache(),
            max_email_size=settings.max_email_size,
            max_email_size_policy=settings.max_email_size_policy,
            mail_ttl=settings.mail_ttl,
            domain=settings.domain,
            strategy_loader=loader,
            api_base=settings.telegram_api_base,
        )
    return _sender
