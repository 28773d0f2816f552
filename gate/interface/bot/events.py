"""Inbound Telegram events.

Raw Bot API updates are parsed into these models at the boundary.
Anything that does not parse is dropped.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel


class TextMessage(BaseModel):
    """A text message sent to the bot."""

    update_id: int = 0
    chat_id: int
    user_id: int
    handle: str = ""
    text: str


class JoinRequest(BaseModel):
    """A request to join a chat the bot administers."""

    update_id: int = 0
    chat_id: int
    user_id: int


Event = Union[TextMessage, JoinRequest]


def parse_update(update: dict[str, Any]) -> Optional[Event]:
    """Parse a raw update.

    Args:
        update: Update object as returned by getUpdates

    Returns:
        The parsed event, or None for anything malformed or irrelevant
    """
    update_id = update.get("update_id", 0)

    message = update.get("message")
    if isinstance(message, dict):
        chat = message.get("chat") or {}
        sender = message.get("from") or {}
        text = message.get("text")
        if not isinstance(text, str) or "id" not in chat or "id" not in sender:
            return None
        return TextMessage(
            update_id=update_id,
            chat_id=chat["id"],
            user_id=sender["id"],
            handle=sender.get("username") or "",
            text=text,
        )

    join_request = update.get("chat_join_request")
    if isinstance(join_request, dict):
        chat = join_request.get("chat") or {}
        sender = join_request.get("from") or {}
        if "id" not in chat or "id" not in sender:
            return None
        return JoinRequest(
            update_id=update_id, chat_id=chat["id"], user_id=sender["id"]
        )

    return None
