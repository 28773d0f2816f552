"""Subscription repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from gate.domain.model.subscription import Subscription
from gate.domain.value import RedemptionCode, SubscriptionId, SubscriptionStatus, UserId


class SubscriptionRepository(ABC):
    """Repository for Subscription entity.

    Updates are column-scoped (link, status) so a link refresh can never
    clobber a concurrent status change and vice versa.
    """

    @abstractmethod
    async def find_by_id(self, subscription_id: SubscriptionId) -> Subscription | None:
        """Find a subscription by ID."""
        pass

    @abstractmethod
    async def find(self, user_id: UserId, code: RedemptionCode) -> Subscription | None:
        """Find the subscription a user obtained with a code.

        Args:
            user_id: Telegram user ID
            code: Redemption token

        Returns:
            The subscription if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active_for_user(
        self, user_id: UserId, now: datetime
    ) -> Subscription | None:
        """Find any active, unexpired subscription of a user.

        Args:
            user_id: Telegram user ID
            now: Reference instant

        Returns:
            A subscription with status active and expires_at > now, or None
        """
        pass

    @abstractmethod
    async def create(self, subscription: Subscription) -> Subscription:
        """Insert a new subscription.

        Raises:
            DuplicateError: If the user already has a subscription for this code
        """
        pass

    @abstractmethod
    async def update_invite_link(
        self, subscription_id: SubscriptionId, invite_link: str
    ) -> None:
        """Overwrite the current invite link."""
        pass

    @abstractmethod
    async def update_status(
        self, subscription_id: SubscriptionId, status: SubscriptionStatus
    ) -> None:
        """Overwrite the status."""
        pass

    @abstractmethod
    async def delete(self, subscription_id: SubscriptionId) -> None:
        """Remove a subscription. No-op if it does not exist."""
        pass

    @abstractmethod
    async def list_expirable(self, now: datetime) -> list[Subscription]:
        """List active subscriptions whose expiry is at or before ``now``.

        Returns a materialized snapshot ordered by expiry.
        """
        pass
