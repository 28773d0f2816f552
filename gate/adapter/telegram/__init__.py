"""Telegram Bot API adapter."""

from .client import (
    MockTelegramGateway,
    RealTelegramGateway,
    TelegramGateway,
)

__all__ = ["TelegramGateway", "RealTelegramGateway", "MockTelegramGateway"]
