"""Subscription store domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from gate.domain.model.subscription import Subscription
from gate.domain.repository import SubscriptionRepository
from gate.domain.value import RedemptionCode, SubscriptionId, SubscriptionStatus, UserId

from .base import Service


class SubscriptionService(Service):
    """Domain service owning per-user subscription records."""

    def __init__(self, subscription_repository: SubscriptionRepository) -> None:
        """Initialize subscription service.

        Args:
            subscription_repository: Subscription repository
        """
        self.subscription_repository = subscription_repository

    async def find(
        self, user_id: UserId, code: RedemptionCode
    ) -> Subscription | None:
        """Get the subscription a user obtained with a code."""
        return await self.subscription_repository.find(user_id, code)

    async def find_active_for_user(
        self, user_id: UserId, now: datetime
    ) -> Subscription | None:
        """Get an active subscription of a user that has not lapsed at ``now``."""
        subscription = await self.subscription_repository.find_active_for_user(
            user_id, now
        )
        # Storage filters on expiry too; this keeps the invariant local
        if subscription is not None and not subscription.is_active_at(now):
            return None
        return subscription

    async def create(
        self,
        user_id: UserId,
        handle: str,
        code: RedemptionCode,
        joined_at: datetime,
        expires_at: datetime,
        invite_link: str,
    ) -> Subscription:
        """Create an active subscription.

        Raises:
            DuplicateError: If the user already has a subscription for this code
        """
        with logfire.span("subscription_service.create", user_id=user_id):
            subscription = Subscription(
                id=SubscriptionId(uuid4()),
                user_id=user_id,
                handle=handle,
                code=code,
                joined_at=joined_at,
                expires_at=expires_at,
                status=SubscriptionStatus.ACTIVE,
                invite_link=invite_link,
            )
            saved = await self.subscription_repository.create(subscription)
            logfire.info(
                "Subscription created",
                subscription_id=str(saved.id),
                user_id=user_id,
                expires_at=expires_at.isoformat(),
            )
            return saved

    async def refresh_link(
        self, subscription: Subscription, invite_link: str
    ) -> Subscription:
        """Replace the current invite link. Expiry and status are untouched."""
        await self.subscription_repository.update_invite_link(
            subscription.id, invite_link
        )
        logfire.info(
            "Subscription link refreshed",
            subscription_id=str(subscription.id),
            user_id=subscription.user_id,
        )
        return subscription.model_copy(update={"invite_link": invite_link})

    async def expire(self, subscription: Subscription) -> Subscription:
        """Mark a subscription expired. Idempotent."""
        if subscription.status != SubscriptionStatus.EXPIRED:
            await self.subscription_repository.update_status(
                subscription.id, SubscriptionStatus.EXPIRED
            )
            logfire.info(
                "Subscription expired",
                subscription_id=str(subscription.id),
                user_id=subscription.user_id,
            )
        return subscription.model_copy(update={"status": SubscriptionStatus.EXPIRED})

    async def discard(self, subscription: Subscription) -> None:
        """Drop a provisional subscription that never took effect."""
        await self.subscription_repository.delete(subscription.id)
        logfire.info(
            "Subscription discarded",
            subscription_id=str(subscription.id),
            user_id=subscription.user_id,
        )

    async def ban(self, subscription: Subscription) -> Subscription:
        """Mark a subscription banned.

        Reserved for moderation tooling; the bot flows never call it.
        """
        await self.subscription_repository.update_status(
            subscription.id, SubscriptionStatus.BANNED
        )
        logfire.warn(
            "Subscription banned",
            subscription_id=str(subscription.id),
            user_id=subscription.user_id,
        )
        return subscription.model_copy(update={"status": SubscriptionStatus.BANNED})

    async def find_by_id(
        self, subscription_id: SubscriptionId
    ) -> Subscription | None:
        """Re-read a subscription from storage."""
        return await self.subscription_repository.find_by_id(subscription_id)

    async def list_expirable(self, now: datetime) -> list[Subscription]:
        """Snapshot of active subscriptions that lapsed at or before ``now``."""
        with logfire.span("subscription_service.list_expirable"):
            due = await self.subscription_repository.list_expirable(now)
            logfire.info("Expirable subscriptions listed", count=len(due))
            return due
