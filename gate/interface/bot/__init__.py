"""Telegram bot interface."""

from gate.interface.bot.conversation import AdminConversationStore
from gate.interface.bot.dispatcher import UpdateDispatcher
from gate.interface.bot.events import JoinRequest, TextMessage, parse_update
from gate.interface.bot.poller import UpdatePoller

__all__ = [
    "AdminConversationStore",
    "JoinRequest",
    "TextMessage",
    "UpdateDispatcher",
    "UpdatePoller",
    "parse_update",
]
