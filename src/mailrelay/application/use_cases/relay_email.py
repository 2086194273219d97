"""Relay inbound emails: block check, idempotent forwarding and notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional

from loguru import logger

from mailrelay.application.ports.block_evaluator import BlockEvaluator
from mailrelay.application.ports.inbound_email import InboundEmail
from mailrelay.application.ports.notification_sender import NotificationSender
from mailrelay.application.ports.status_store import StatusStore
from mailrelay.domain.entities.delivery_status import DeliveryStatus
from mailrelay.domain.models import BlockAction, BlockPolicy

STATUS_TTL_SECONDS = 60 * 60


def parse_address_list(raw: Optional[str]) -> tuple[str, ...]:
    """Split a comma-separated address list, dropping blanks and repeats."""
    out: list[str] = []
    for item in (raw or "").split(","):
        address = item.strip()
        if address and address not in out:
            out.append(address)
    return tuple(out)


@dataclass(frozen=True)
class RelayConfig:
    forward_list: tuple[str, ...] = ()
    block_policy: BlockPolicy = field(default_factory=lambda: BlockPolicy.parse(None))
    guardian_mode: bool = False
    status_ttl: int = STATUS_TTL_SECONDS

    @classmethod
    def from_settings(cls, settings) -> "RelayConfig":
        return cls(
            forward_list=parse_address_list(settings.forward_list),
            block_policy=BlockPolicy.parse(settings.block_policy),
            guardian_mode=settings.guardian_mode,
        )


@dataclass
class StepResult:
    """Outcome of one pipeline step, logged by the use case."""

    name: str
    ok: bool
    error: str | None = None
    detail: dict[str, Any] = field(default_factory=dict)


class RelayEmailUseCase:
    """Relay one inbound email.

    Flow:
    1. Evaluate the block list
    2. Load delivery status (guardian mode only; fresh record otherwise)
    3. Reject blocked mail if the policy says so, and stop
    4. Forward to each configured recipient not yet forwarded to
    5. Send the Telegram notification unless already notified

    Steps 4 and 5 fail independently of each other. Nothing is raised to the
    caller. Duplicate deliveries racing on the same Message-ID are not
    serialized; the last status write wins.
    """

    def __init__(
        self,
        config: RelayConfig,
        store: StatusStore,
        evaluator: BlockEvaluator,
        sender: NotificationSender,
    ) -> None:
        self.config = config
        self.store = store
        self.evaluator = evaluator
        self.sender = sender

    async def process(self, message: InboundEmail) -> None:
        """Process a single inbound email."""
        message_id = message.headers.get("Message-ID")
        message_id = str(message_id).strip() if message_id else None
        is_blocked = await self._is_blocked(message, message_id)

        guardian = self.config.guardian_mode
        if guardian and not message_id:
            logger.warning(f"Email from {message.sender} has no Message-ID, delivery status disabled")
            guardian = False
        policy = self.config.block_policy
        status = await self._load_status(message_id, guardian)

        if is_blocked and policy.suppresses(BlockAction.REJECT):
            message.set_reject("Blocked")
            logger.info(f"Rejected blocked email {message_id} from {message.sender}")
            return

        results = [
            await self._guarded("forward", lambda: self._forward(message, message_id, status, is_blocked, guardian)),
            await self._guarded("notify", lambda: self._notify(message, message_id, status, is_blocked, guardian)),
        ]
        for result in results:
            if result.ok:
                logger.info(f"Email {message_id} step {result.name} done: {result.detail}")
            else:
                logger.error(f"Email {message_id} step {result.name} failed: {result.error}")

    async def _is_blocked(self, message: InboundEmail, message_id: Optional[str]) -> bool:
        try:
            return bool(await self.evaluator.evaluate(message))
        except Exception as e:
            logger.exception(f"Block evaluation failed for {message_id}, treating as not blocked: {e}")
            return False

    async def _load_status(self, message_id: Optional[str], guardian: bool) -> DeliveryStatus:
        if not guardian:
            return DeliveryStatus()
        try:
            return await self.store.load(message_id, guardian)
        except Exception as e:
            logger.exception(f"Failed to load delivery status for {message_id}: {e}")
            return DeliveryStatus()

    async def _guarded(self, name: str, step: Callable[[], Awaitable[StepResult]]) -> StepResult:
        try:
            return await step()
        except Exception as e:
            logger.exception(f"Step {name} aborted: {e}")
            return StepResult(name=name, ok=False, error=str(e))

    async def _forward(
        self,
        message: InboundEmail,
        message_id: Optional[str],
        status: DeliveryStatus,
        is_blocked: bool,
        guardian: bool,
    ) -> StepResult:
        block_forward = is_blocked and self.config.block_policy.suppresses(BlockAction.FORWARD)
        recipients = () if block_forward else self.config.forward_list

        forwarded: list[str] = []
        skipped: list[str] = []
        failed: list[str] = []
        unsaved: list[str] = []
        for address in recipients:
            if status.has_forwarded(address):
                skipped.append(address)
                continue
            try:
                await message.forward(address)
            except Exception as e:
                failed.append(address)
                logger.exception(f"Failed to forward {message_id} to {address}: {e}")
                continue

            forwarded.append(address)
            if guardian:
                status.mark_forwarded(address)
                try:
                    await self.store.save(message_id, status, self.config.status_ttl)
                except Exception as e:
                    unsaved.append(address)
                    logger.exception(f"Failed to persist delivery status for {message_id} after {address}: {e}")

        errors = []
        if failed:
            errors.append(f"failed recipients: {failed}")
        if unsaved:
            errors.append(f"status not persisted after: {unsaved}")
        return StepResult(
            name="forward",
            ok=not errors,
            error="; ".join(errors) or None,
            detail={"forwarded": forwarded, "skipped": skipped, "blocked": block_forward},
        )

    async def _notify(
        self,
        message: InboundEmail,
        message_id: Optional[str],
        status: DeliveryStatus,
        is_blocked: bool,
        guardian: bool,
    ) -> StepResult:
        block_telegram = is_blocked and self.config.block_policy.suppresses(BlockAction.TELEGRAM)

        result = StepResult(name="notify", ok=True, detail={"sent": False, "blocked": block_telegram})
        if not status.notified and not block_telegram:
            try:
                sent = await self.sender.send(message)
                result.detail["sent"] = sent.success
                if not sent.success:
                    result.ok = False
                    result.error = "; ".join(sent.errors) or "notification not delivered"
            except Exception as e:
                logger.exception(f"Failed to notify for {message_id}: {e}")
                result.ok = False
                result.error = str(e)

        # A failed send is not retried on redelivery
        if guardian and not status.notified:
            status.mark_notified()
            await self.store.save(message_id, status, self.config.status_ttl)
        return result


# Convenience entry point for hosting runtimes
_use_case: RelayEmailUseCase | None = None


def get_relay_use_case() -> RelayEmailUseCase:
    """Get or create the relay use case wired from settings."""
    global _use_case
    if _use_case is None:
        from mailrelay.infrastructure.blocklist import PatternBlockEvaluator
        from mailrelay.infrastructure.settings import get_settings
        from mailrelay.infrastructure.stores import get_status_store
        from mailrelay.infrastructure.telegram import get_telegram_sender

        settings = get_settings()
        _use_case = RelayEmailUseCase(
            config=RelayConfig.from_settings(settings),
            store=get_status_store(),
            evaluator=PatternBlockEvaluator.from_settings(settings),
            sender=get_telegram_sender(),
        )
    return _use_case


async def relay_email(message: InboundEmail) -> None:
    """Process one inbound email with the default wiring."""
    await get_relay_use_case().process(message)
