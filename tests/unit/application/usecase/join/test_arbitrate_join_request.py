"""Unit tests for ArbitrateJoinRequestUseCase."""

from datetime import timedelta

import pytest

from gate.adapter.telegram import TelegramGateway
from gate.application.usecase.join import (
    ArbitrateJoinRequestUseCase,
    JoinDecision,
    JoinRequestDecisionRequest,
)
from gate.domain.repository import AuditRepository, SubscriptionRepository
from gate.domain.value import AuditAction, SubscriptionStatus
from tests.factories import CHANNEL_ID, T0, make_subscription
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestArbitrateJoinRequest:
    """Tests for ArbitrateJoinRequestUseCase."""

    @pytest.mark.asyncio
    async def test_active_subscriber_is_approved(self, unit_env):
        # Arrange
        subscription_repo = await unit_env.get(SubscriptionRepository)
        await subscription_repo.create(make_subscription(user_id=100))
        gateway = await unit_env.get(TelegramGateway)
        audit_repo = await unit_env.get(AuditRepository)
        use_case = await unit_env.get(ArbitrateJoinRequestUseCase)

        # Act
        response = await use_case.execute(
            JoinRequestDecisionRequest(user_id=100, now=T0 + timedelta(days=1))
        )

        # Assert
        assert response.decision == JoinDecision.APPROVED
        assert response.delivered is True
        assert gateway.calls_to("approve_join_request") == [
            {"chat_id": CHANNEL_ID, "user_id": 100}
        ]
        assert gateway.calls_to("decline_join_request") == []
        (entry,) = await audit_repo.find(action=AuditAction.JOIN_APPROVED)
        assert entry.actor_id == 100

    @pytest.mark.asyncio
    async def test_unknown_user_is_declined(self, unit_env):
        gateway = await unit_env.get(TelegramGateway)
        audit_repo = await unit_env.get(AuditRepository)
        use_case = await unit_env.get(ArbitrateJoinRequestUseCase)

        response = await use_case.execute(
            JoinRequestDecisionRequest(user_id=555, now=T0)
        )

        assert response.decision == JoinDecision.DECLINED
        assert gateway.calls_to("decline_join_request") == [
            {"chat_id": CHANNEL_ID, "user_id": 555}
        ]
        assert len(await audit_repo.find(action=AuditAction.JOIN_DECLINED)) == 1

    @pytest.mark.asyncio
    async def test_lapsed_subscriber_is_declined(self, unit_env):
        """Expiry is checked at decision time, before the sweeper runs."""
        subscription_repo = await unit_env.get(SubscriptionRepository)
        await subscription_repo.create(make_subscription(user_id=100, days=15))
        use_case = await unit_env.get(ArbitrateJoinRequestUseCase)

        response = await use_case.execute(
            JoinRequestDecisionRequest(user_id=100, now=T0 + timedelta(days=15))
        )

        assert response.decision == JoinDecision.DECLINED

    @pytest.mark.asyncio
    async def test_banned_subscriber_is_declined(self, unit_env):
        subscription_repo = await unit_env.get(SubscriptionRepository)
        await subscription_repo.create(
            make_subscription(user_id=100, status=SubscriptionStatus.BANNED)
        )
        use_case = await unit_env.get(ArbitrateJoinRequestUseCase)

        response = await use_case.execute(
            JoinRequestDecisionRequest(user_id=100, now=T0)
        )

        assert response.decision == JoinDecision.DECLINED

    @pytest.mark.asyncio
    async def test_gateway_failure_is_audited_not_raised(self, unit_env):
        # Arrange
        subscription_repo = await unit_env.get(SubscriptionRepository)
        await subscription_repo.create(make_subscription(user_id=100))
        gateway = await unit_env.get(TelegramGateway)
        gateway.fail_join_decisions = True
        audit_repo = await unit_env.get(AuditRepository)
        use_case = await unit_env.get(ArbitrateJoinRequestUseCase)

        # Act
        response = await use_case.execute(
            JoinRequestDecisionRequest(user_id=100, now=T0)
        )

        # Assert
        assert response.decision == JoinDecision.APPROVED
        assert response.delivered is False
        (entry,) = await audit_repo.find(action=AuditAction.JOIN_FAILED)
        assert entry.context["decision"] == "approved"
        assert "mock outage" in entry.context["error"]
        assert await audit_repo.find(action=AuditAction.JOIN_APPROVED) == []
