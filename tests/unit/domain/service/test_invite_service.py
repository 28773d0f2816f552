"""Unit tests for InviteService."""

from datetime import timedelta

import pytest

from gate.adapter.telegram import TelegramGateway
from gate.domain.error import GatewayUnavailableError
from gate.domain.service import InviteService
from tests.factories import CHANNEL_ID, T0
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestIssueLink:
    """Tests for issue_link method."""

    @pytest.mark.asyncio
    async def test_link_is_gated_and_bounded_by_expiry(self, unit_env):
        """The link requires approval and stops working at the expiry instant."""
        # Arrange
        invite_service = await unit_env.get(InviteService)
        gateway = await unit_env.get(TelegramGateway)
        expires_at = T0 + timedelta(days=15)
        expire_unix = int(expires_at.timestamp())

        # Act
        link = await invite_service.issue_link(expires_at)

        # Assert
        assert link.startswith("https://t.me/+")
        (call,) = gateway.calls_to("create_invite_link")
        assert call == {
            "chat_id": CHANNEL_ID,
            "expire_date": expire_unix,
            "creates_join_request": True,
            "name": f"gate-{expire_unix}",
        }

    @pytest.mark.asyncio
    async def test_each_call_yields_a_new_link(self, unit_env):
        invite_service = await unit_env.get(InviteService)

        first = await invite_service.issue_link(T0)
        second = await invite_service.issue_link(T0)

        assert first != second

    @pytest.mark.asyncio
    async def test_gateway_failure_propagates(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        gateway = await unit_env.get(TelegramGateway)
        gateway.fail_invite_links = True

        with pytest.raises(GatewayUnavailableError):
            await invite_service.issue_link(T0)
