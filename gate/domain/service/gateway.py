"""Channel gateway interface.

The gateway is the only way the domain talks to the messaging platform.
"""

from gate.domain.value import ChatId, UserId


class ChannelGateway:
    """Outbound messaging capability.

    Implementations raise GatewayUnavailableError on transport or API
    failures (RemovalFailedError for remove_member).
    """

    async def create_invite_link(
        self,
        chat_id: ChatId,
        expire_date: int,
        creates_join_request: bool,
        name: str,
    ) -> str:
        """Create a new invite link for a chat.

        Args:
            chat_id: Chat the link admits to
            expire_date: Absolute expiry, seconds since the epoch
            creates_join_request: Whether arrivals need explicit approval
            name: Human-readable link label

        Returns:
            The invite link URL
        """
        raise NotImplementedError

    async def approve_join_request(self, chat_id: ChatId, user_id: UserId) -> None:
        """Approve a pending join request."""
        raise NotImplementedError

    async def decline_join_request(self, chat_id: ChatId, user_id: UserId) -> None:
        """Decline a pending join request."""
        raise NotImplementedError

    async def remove_member(self, chat_id: ChatId, user_id: UserId) -> None:
        """Force a member out of a chat without blocking a later rejoin.

        Implemented as ban followed by unban.
        """
        raise NotImplementedError

    async def send_message(self, chat_id: ChatId, text: str) -> None:
        """Send a text message."""
        raise NotImplementedError
