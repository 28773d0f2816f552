"""Arbitrate join request use case."""

from datetime import datetime
from enum import Enum

import logfire
from pydantic import BaseModel

from gate.application.usecase.base import BaseUseCase
from gate.config import Settings
from gate.domain.error import GatewayUnavailableError
from gate.domain.service import AuditService, ChannelGateway, SubscriptionService
from gate.domain.value import AuditAction, ChatId, UserId


class JoinDecision(str, Enum):
    """Decision taken on a join request."""

    APPROVED = "approved"
    DECLINED = "declined"


class JoinRequestDecisionRequest(BaseModel):
    """A user asking to enter the channel."""

    user_id: int
    now: datetime


class JoinRequestDecisionResponse(BaseModel):
    """Decision and whether the gateway accepted it."""

    decision: JoinDecision
    delivered: bool


class ArbitrateJoinRequestUseCase(
    BaseUseCase[JoinRequestDecisionRequest, JoinRequestDecisionResponse]
):
    """Approve join requests of users holding an active subscription."""

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
        self, request: JoinRequestDecisionRequest
    ) -> JoinRequestDecisionResponse:
        """Execute join arbitration.

        Gateway failures are audited and swallowed; the request simply stays
        pending on the platform side.

        Args:
            request: Join request

        Returns:
            The decision taken
        """
        user_id = UserId(request.user_id)

        with logfire.span("arbitrate_join_request", user_id=user_id):
            subscription = await self.subscription_service.find_active_for_user(
                user_id, request.now
            )
            decision = JoinDecision.APPROVED if subscription else JoinDecision.DECLINED

            try:
                if decision == JoinDecision.APPROVED:
                    await self.gateway.approve_join_request(self.channel_id, user_id)
                else:
                    await self.gateway.decline_join_request(self.channel_id, user_id)
            except GatewayUnavailableError as e:
                logfire.error(
                    "Join request decision failed",
                    user_id=user_id,
                    decision=decision.value,
                    error=str(e),
                )
                await self.audit_service.record(
                    AuditAction.JOIN_FAILED,
                    user_id,
                    request.now,
                    chat_id=self.channel_id,
                    decision=decision.value,
                    error=str(e),
                )
                return JoinRequestDecisionResponse(decision=decision, delivered=False)

            action = (
                AuditAction.JOIN_APPROVED
                if decision == JoinDecision.APPROVED
                else AuditAction.JOIN_DECLINED
            )
            await self.audit_service.record(
                action, user_id, request.now, chat_id=self.channel_id
            )
            logfire.info("Join request decided", user_id=user_id, decision=decision.value)

            return JoinRequestDecisionResponse(decision=decision, delivered=True)
