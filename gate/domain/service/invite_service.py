"""Invite issuer domain service."""

from datetime import datetime

import logfire

from gate.domain.value import ChatId

from .base import Service
from .gateway import ChannelGateway


class InviteService(Service):
    """Mints personal, join-request-gated invite links for the channel."""

    def __init__(
        self, gateway: ChannelGateway, channel_id: ChatId, label_prefix: str
    ) -> None:
        """Initialize invite service.

        Args:
            gateway: Channel gateway
            channel_id: The managed channel
            label_prefix: Prefix of the human-readable link label
        """
        self.gateway = gateway
        self.channel_id = channel_id
        self.label_prefix = label_prefix

    async def issue_link(self, expires_at: datetime) -> str:
        """Create an invite link that stops working at ``expires_at``.

        Args:
            expires_at: Absolute link expiry

        Returns:
            Invite link URL

        Raises:
            GatewayUnavailableError: If the gateway call fails
        """
        expire_unix = int(expires_at.timestamp())
        with logfire.span("invite_service.issue_link", expire_date=expire_unix):
            link = await self.gateway.create_invite_link(
                self.channel_id,
                expire_date=expire_unix,
                creates_join_request=True,
                name=f"{self.label_prefix}-{expire_unix}",
            )
            logfire.info("Invite link issued", expire_date=expire_unix)
            return link
