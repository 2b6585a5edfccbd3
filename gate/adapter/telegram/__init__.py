"""Telegram Bot API gateway and webhook update parsing."""

from gate.adapter.telegram.client import (
    MockTelegramGateway,
    RealTelegramGateway,
    TelegramGateway,
)
from gate.adapter.telegram.update import TelegramUpdate, to_membership_event

__all__ = [
    "MockTelegramGateway",
    "RealTelegramGateway",
    "TelegramGateway",
    "TelegramUpdate",
    "to_membership_event",
]
