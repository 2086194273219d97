"""Application layer - relay use case and ports."""

from mailrelay.application.use_cases.relay_email import (
    RelayConfig,
    RelayEmailUseCase,
    StepResult,
    get_relay_use_case,
    relay_email,
)

__all__ = [
    "RelayConfig",
    "RelayEmailUseCase",
    "StepResult",
    "get_relay_use_case",
    "relay_email",
]
