"""Redeem code use case.

The redemption state machine: a presented code is either unknown, taken by
somebody else, redeemed for the first time, or re-entered by its owner.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

import logfire
from pydantic import BaseModel

from gate.application.usecase.base import BaseUseCase
from gate.domain.error import AlreadyUsedError, DuplicateError, GatewayUnavailableError
from gate.domain.model import Code, Subscription
from gate.domain.service import (
    AuditService,
    CodeService,
    InviteService,
    SubscriptionService,
)
from gate.domain.value import AuditAction, RedemptionCode, SubscriptionStatus, UserId


class RedemptionOutcome(str, Enum):
    """Result of a redemption attempt."""

    REDEEMED = "redeemed"
    LINK_REFRESHED = "link_refreshed"
    INVALID_CODE = "invalid_code"
    USED_BY_OTHER = "used_by_other"
    SUBSCRIPTION_MISSING = "subscription_missing"
    SUBSCRIPTION_EXPIRED = "subscription_expired"
    GATEWAY_UNAVAILABLE = "gateway_unavailable"


MESSAGES = {
    RedemptionOutcome.INVALID_CODE: "Invalid code.",
    RedemptionOutcome.USED_BY_OTHER: "This code has already been used by another user.",
    RedemptionOutcome.SUBSCRIPTION_MISSING: "Subscription data not found.",
    RedemptionOutcome.SUBSCRIPTION_EXPIRED: "Your subscription has expired.",
    RedemptionOutcome.GATEWAY_UNAVAILABLE: (
        "Could not create an invite link right now. Please try again later."
    ),
}


def format_expiry(expires_at: datetime) -> str:
    """Render an expiry instant for users."""
    return expires_at.strftime("%Y-%m-%d %H:%M UTC")


class RedeemCodeRequest(BaseModel):
    """Request to redeem a code."""

    user_id: int
    handle: str = ""
    code: str
    now: datetime


class RedeemCodeResponse(BaseModel):
    """Response after a redemption attempt."""

    outcome: RedemptionOutcome
    message: str
    expires_at: Optional[datetime] = None
    invite_link: Optional[str] = None


class RedeemCodeUseCase(BaseUseCase[RedeemCodeRequest, RedeemCodeResponse]):
    """Use case for redeeming a code for a personal invite link."""

    def __init__(
        self,
        code_service: CodeService,
        subscription_service: SubscriptionService,
        invite_service: InviteService,
        audit_service: AuditService,
    ) -> None:
        """Initialize use case.

        Args:
            code_service: Code domain service
            subscription_service: Subscription domain service
            invite_service: Invite domain service
            audit_service: Audit domain service
        """
        self.code_service = code_service
        self.subscription_service = subscription_service
        self.invite_service = invite_service
        self.audit_service = audit_service

    async def execute(self, request: RedeemCodeRequest) -> RedeemCodeResponse:
        """Execute redeem code use case.

        Args:
            request: Redeem code request

        Returns:
            Outcome with the reply text, and the link on success
        """
        user_id = UserId(request.user_id)

        with logfire.span(
            "redeem_code", user_id=user_id, code=request.code[:4] + "..."
        ):
            token = RedemptionCode.parse(request.code)
            if token is None:
                return await self._reject(
                    request, RedemptionOutcome.INVALID_CODE, reason="malformed"
                )

            code = await self.code_service.lookup(token)
            if code is None:
                return await self._reject(
                    request, RedemptionOutcome.INVALID_CODE, reason="not_found"
                )

            if code.is_used and not code.is_used_by(user_id):
                return await self._reject(
                    request, RedemptionOutcome.USED_BY_OTHER, reason="used_by_other"
                )

            if not code.is_used:
                return await self._redeem_first_time(request, code)

            return await self._reenter(request, code)

    async def _redeem_first_time(
        self, request: RedeemCodeRequest, code: Code
    ) -> RedeemCodeResponse:
        """Grant a subscription for an unused code.

        The link is requested before anything is written, so a gateway
        outage leaves the code unused and no subscription behind.
        """
        user_id = UserId(request.user_id)
        expires_at = code.expiry_from(request.now)

        try:
            invite_link = await self.invite_service.issue_link(expires_at)
        except GatewayUnavailableError as e:
            return await self._gateway_failed(request, error=e)

        try:
            subscription = await self.subscription_service.create(
                user_id=user_id,
                handle=request.handle,
                code=code.code,
                joined_at=request.now,
                expires_at=expires_at,
                invite_link=invite_link,
            )
        except DuplicateError:
            # Same user, duplicate delivery: finish the binding, then re-enter
            logfire.info("Duplicate redemption delivery", user_id=user_id)
            try:
                code = await self.code_service.mark_used(code.code, user_id, request.now)
            except AlreadyUsedError:
                return await self._reject(
                    request, RedemptionOutcome.USED_BY_OTHER, reason="lost_race"
                )
            return await self._reenter(request, code)

        try:
            await self.code_service.mark_used(code.code, user_id, request.now)
        except AlreadyUsedError:
            await self.subscription_service.discard(subscription)
            return await self._reject(
                request, RedemptionOutcome.USED_BY_OTHER, reason="lost_race"
            )

        await self.audit_service.record(
            AuditAction.CODE_REDEEMED,
            user_id,
            request.now,
            code=code.code.root,
            days=int(code.duration),
        )
        await self.audit_service.record(
            AuditAction.LINK_GENERATED,
            user_id,
            request.now,
            link=invite_link,
            expires_at=expires_at.isoformat(),
        )

        logfire.info(
            "Code redeemed",
            user_id=user_id,
            days=int(code.duration),
            expires_at=expires_at.isoformat(),
        )

        return RedeemCodeResponse(
            outcome=RedemptionOutcome.REDEEMED,
            message=(
                "Code accepted.\n"
                f"Valid until: {format_expiry(expires_at)}\n\n"
                "Use this link to request to join the channel:\n"
                f"{invite_link}\n\n"
                "If you leave the channel, you can request to join again "
                "with this code until your subscription ends."
            ),
            expires_at=expires_at,
            invite_link=invite_link,
        )

    async def _reenter(
        self, request: RedeemCodeRequest, code: Code
    ) -> RedeemCodeResponse:
        """Handle the owner presenting their code again. Never extends expiry."""
        user_id = UserId(request.user_id)

        subscription = await self.subscription_service.find(user_id, code.code)
        if subscription is None:
            return await self._reject(
                request,
                RedemptionOutcome.SUBSCRIPTION_MISSING,
                reason="subscription_missing",
            )

        if subscription.status == SubscriptionStatus.BANNED:
            return await self._reject(
                request,
                RedemptionOutcome.SUBSCRIPTION_EXPIRED,
                reason=subscription.status.value,
            )

        if subscription.is_lapsed(request.now) or (
            subscription.status == SubscriptionStatus.EXPIRED
        ):
            return await self._expire_on_reentry(request, subscription)

        try:
            invite_link = await self.invite_service.issue_link(subscription.expires_at)
        except GatewayUnavailableError as e:
            return await self._gateway_failed(request, error=e)

        subscription = await self.subscription_service.refresh_link(
            subscription, invite_link
        )
        await self.audit_service.record(
            AuditAction.LINK_REGENERATED,
            user_id,
            request.now,
            link=invite_link,
            expires_at=subscription.expires_at.isoformat(),
        )

        return RedeemCodeResponse(
            outcome=RedemptionOutcome.LINK_REFRESHED,
            message=(
                "Your subscription is active.\n"
                f"Valid until: {format_expiry(subscription.expires_at)}\n\n"
                "Join request link:\n"
                f"{invite_link}"
            ),
            expires_at=subscription.expires_at,
            invite_link=invite_link,
        )

    async def _expire_on_reentry(
        self, request: RedeemCodeRequest, subscription: Subscription
    ) -> RedeemCodeResponse:
        subscription = await self.subscription_service.expire(subscription)
        await self.audit_service.record(
            AuditAction.SUBSCRIPTION_EXPIRED,
            UserId(request.user_id),
            request.now,
            code=subscription.code.root,
            expires_at=subscription.expires_at.isoformat(),
        )
        return RedeemCodeResponse(
            outcome=RedemptionOutcome.SUBSCRIPTION_EXPIRED,
            message=MESSAGES[RedemptionOutcome.SUBSCRIPTION_EXPIRED],
            expires_at=subscription.expires_at,
        )

    async def _gateway_failed(
        self, request: RedeemCodeRequest, error: GatewayUnavailableError
    ) -> RedeemCodeResponse:
        logfire.error(
            "Invite link issuance failed", user_id=request.user_id, error=str(error)
        )
        await self.audit_service.record(
            AuditAction.REDEMPTION_FAILED,
            UserId(request.user_id),
            request.now,
            code=request.code,
            error=str(error),
        )
        return RedeemCodeResponse(
            outcome=RedemptionOutcome.GATEWAY_UNAVAILABLE,
            message=MESSAGES[RedemptionOutcome.GATEWAY_UNAVAILABLE],
        )

    async def _reject(
        self, request: RedeemCodeRequest, outcome: RedemptionOutcome, reason: str
    ) -> RedeemCodeResponse:
        logfire.warn("Redemption rejected", user_id=request.user_id, reason=reason)
        await self.audit_service.record(
            AuditAction.REDEMPTION_REJECTED,
            UserId(request.user_id),
            request.now,
            code=request.code,
            reason=reason,
        )
        return RedeemCodeResponse(outcome=outcome, message=MESSAGES[outcome])
