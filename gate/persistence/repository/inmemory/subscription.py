"""In-memory subscription repository for testing."""

from datetime import datetime
from typing import Optional

from gate.domain.error import DuplicateError
from gate.domain.model.subscription import Subscription
from gate.domain.repository.subscription import SubscriptionRepository
from gate.domain.value import RedemptionCode, SubscriptionId, SubscriptionStatus, UserId


class InMemorySubscriptionRepository(SubscriptionRepository):
    """In-memory implementation of SubscriptionRepository for testing."""

    def __init__(self) -> None:
        self._subscriptions: dict[SubscriptionId, Subscription] = {}

    async def find_by_id(self, subscription_id: SubscriptionId) -> Optional[Subscription]:
        """Find a subscription by ID."""
        return self._subscriptions.get(subscription_id)

    async def find(
        self, user_id: UserId, code: RedemptionCode
    ) -> Optional[Subscription]:
        """Find the subscription a user obtained with a code."""
        for subscription in self._subscriptions.values():
            if subscription.user_id == user_id and subscription.code == code:
                return subscription
        return None

    async def find_active_for_user(
        self, user_id: UserId, now: datetime
    ) -> Optional[Subscription]:
        """Find the active subscription of a user that lapses last."""
        matches = [
            s
            for s in self._subscriptions.values()
            if s.user_id == user_id
            and s.status == SubscriptionStatus.ACTIVE
            and s.expires_at > now
        ]
        if not matches:
            return None
        return max(matches, key=lambda s: s.expires_at)

    async def create(self, subscription: Subscription) -> Subscription:
        """Insert a new subscription.

        Raises:
            DuplicateError: If (user_id, code) is already taken
        """
        if await self.find(subscription.user_id, subscription.code):
            raise DuplicateError(
                "Subscription", f"{subscription.user_id}/{subscription.code.root}"
            )
        self._subscriptions[subscription.id] = subscription
        return subscription

    async def update_invite_link(
        self, subscription_id: SubscriptionId, invite_link: str
    ) -> None:
        """Overwrite the invite link."""
        current = self._subscriptions.get(subscription_id)
        if current is not None:
            self._subscriptions[subscription_id] = current.model_copy(
                update={"invite_link": invite_link}
            )

    async def update_status(
        self, subscription_id: SubscriptionId, status: SubscriptionStatus
    ) -> None:
        """Overwrite the status."""
        current = self._subscriptions.get(subscription_id)
        if current is not None:
            self._subscriptions[subscription_id] = current.model_copy(
                update={"status": status}
            )

    async def delete(self, subscription_id: SubscriptionId) -> None:
        """Remove a subscription."""
        self._subscriptions.pop(subscription_id, None)

    async def list_expirable(self, now: datetime) -> list[Subscription]:
        """List active subscriptions due for revocation, ordered by expiry."""
        due = [
            s
            for s in self._subscriptions.values()
            if s.status == SubscriptionStatus.ACTIVE and s.expires_at <= now
        ]
        due.sort(key=lambda s: s.expires_at)
        return due
