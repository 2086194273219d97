"""Inbound email relay: block policy, idempotent forwarding and Telegram notification."""

__version__ = "0.1.0"
