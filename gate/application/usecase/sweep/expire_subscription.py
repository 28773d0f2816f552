"""Expire subscription use case."""

from datetime import datetime
from enum import Enum
from uuid import UUID

import logfire
from pydantic import BaseModel

from gate.application.usecase.base import BaseUseCase
from gate.config import Settings
from gate.domain.error import RemovalFailedError
from gate.domain.service import AuditService, ChannelGateway, SubscriptionService
from gate.domain.value import AuditAction, ChatId, SubscriptionId, SubscriptionStatus


class ExpiryOutcome(str, Enum):
    """What happened to one lapsed subscription."""

    KICKED = "kicked"
    KICK_FAILED = "kick_failed"
    SKIPPED = "skipped"


class ExpireSubscriptionRequest(BaseModel):
    """Request to revoke one lapsed subscription."""

    subscription_id: UUID
    now: datetime


class ExpireSubscriptionResponse(BaseModel):
    """Result of revoking one subscription."""

    outcome: ExpiryOutcome
    error: str | None = None


class ExpireSubscriptionUseCase(
    BaseUseCase[ExpireSubscriptionRequest, ExpireSubscriptionResponse]
):
    """Remove a lapsed subscriber from the channel and mark them expired."""

    def __init__(
        self,
        subscription_service: SubscriptionService,
        audit_service: AuditService,
        gateway: ChannelGateway,
        settings: Settings,
    ) -> None:
        """Initialize use case.

        Args:
            subscription_service: Subscription domain service
            audit_service: Audit domain service
            gateway: Channel gateway
            settings: Application settings
        """
        self.subscription_service = subscription_service
        self.audit_service = audit_service
        self.gateway = gateway
        self.channel_id = ChatId(settings.telegram.channel_id)

    async def execute(
        self, request: ExpireSubscriptionRequest
    ) -> ExpireSubscriptionResponse:
        """Execute expiry for one subscription.

        The subscription is re-read first; anything no longer active and
        lapsed (already expired, banned, or not yet due) is skipped. A failed
        removal never blocks the transition to expired.

        Args:
            request: Expire subscription request

        Returns:
            Kicked, kick_failed or skipped
        """
        subscription_id = SubscriptionId(request.subscription_id)

        with logfire.span(
            "expire_subscription", subscription_id=str(subscription_id)
        ):
            subscription = await self.subscription_service.find_by_id(subscription_id)
            if (
                subscription is None
                or subscription.status != SubscriptionStatus.ACTIVE
                or not subscription.is_lapsed(request.now)
            ):
                logfire.info("Skipping stale expiry entry")
                return ExpireSubscriptionResponse(outcome=ExpiryOutcome.SKIPPED)

            error: str | None = None
            try:
                await self.gateway.remove_member(self.channel_id, subscription.user_id)
            except RemovalFailedError as e:
                error = e.reason
                logfire.error(
                    "Failed to remove expired member",
                    user_id=subscription.user_id,
                    error=error,
                )

            await self.subscription_service.expire(subscription)

            if error is None:
                await self.audit_service.record(
                    AuditAction.EXPIRED_KICKED,
                    subscription.user_id,
                    request.now,
                    subscription_id=str(subscription.id),
                )
                return ExpireSubscriptionResponse(outcome=ExpiryOutcome.KICKED)

            await self.audit_service.record(
                AuditAction.EXPIRED_KICK_FAILED,
                subscription.user_id,
                request.now,
                subscription_id=str(subscription.id),
                error=error,
            )
            return ExpireSubscriptionResponse(
                outcome=ExpiryOutcome.KICK_FAILED, error=error
            )
