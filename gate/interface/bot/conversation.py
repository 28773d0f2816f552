"""Admin conversation sessions.

After a bare ``/generate`` the bot waits for the admin to send the
duration. The pending prompt is keyed by (admin, chat) so messages from
anyone else, or from another chat, never answer it.
"""

from datetime import datetime, timedelta

from gate.domain.value import ChatId, UserId


class AdminConversationStore:
    """Pending duration prompts with a timeout."""

    def __init__(self, timeout_seconds: float) -> None:
        """Initialize the store.

        Args:
            timeout_seconds: How long a prompt stays open
        """
        self.timeout = timedelta(seconds=timeout_seconds)
        self._pending: dict[tuple[UserId, ChatId], datetime] = {}

    def open(self, admin_id: UserId, chat_id: ChatId, now: datetime) -> None:
        """Open (or re-open) a prompt."""
        self._pending[(admin_id, chat_id)] = now + self.timeout

    def consume(self, admin_id: UserId, chat_id: ChatId, now: datetime) -> bool:
        """Close the prompt if one is open and not timed out.

        Returns:
            True if this message answers an open prompt
        """
        deadline = self._pending.pop((admin_id, chat_id), None)
        return deadline is not None and now < deadline

    def purge(self, now: datetime) -> int:
        """Drop timed-out prompts.

        Returns:
            Number of prompts dropped
        """
        expired = [key for key, deadline in self._pending.items() if deadline <= now]
        for key in expired:
            del self._pending[key]
        return len(expired)
