"""PostgreSQL implementation of Subscription repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gate.domain.error import DuplicateError
from gate.domain.model import Subscription
from gate.domain.repository import SubscriptionRepository
from gate.domain.value import RedemptionCode, SubscriptionId, SubscriptionStatus, UserId
from gate.persistence.mappers import row_to_subscription, subscription_to_dict
from gate.persistence.tables import subscriptions_table


class PostgresSubscriptionRepository(SubscriptionRepository):
    """PostgreSQL implementation of SubscriptionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, subscription_id: SubscriptionId) -> Optional[Subscription]:
        """Find a subscription by ID."""
        stmt = select(subscriptions_table).where(
            subscriptions_table.c.id == subscription_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_subscription(dict(row)) if row else None

    async def find(
        self, user_id: UserId, code: RedemptionCode
    ) -> Optional[Subscription]:
        """Find the subscription a user obtained with a code."""
        stmt = select(subscriptions_table).where(
            and_(
                subscriptions_table.c.user_id == user_id,
                subscriptions_table.c.code == code.root,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_subscription(dict(row)) if row else None

    async def find_active_for_user(
        self, user_id: UserId, now: datetime
    ) -> Optional[Subscription]:
        """Find the active subscription of a user that lapses last.

        Uses index idx_subscriptions_user_status.
        """
        stmt = (
            select(subscriptions_table)
            .where(
                and_(
                    subscriptions_table.c.user_id == user_id,
                    subscriptions_table.c.status == SubscriptionStatus.ACTIVE.value,
                    subscriptions_table.c.expires_at > now,
                )
            )
            .order_by(subscriptions_table.c.expires_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_subscription(dict(row)) if row else None

    async def create(self, subscription: Subscription) -> Subscription:
        """Insert a new subscription.

        Raises:
            DuplicateError: If (user_id, code) is already taken
        """
        stmt = insert(subscriptions_table).values(**subscription_to_dict(subscription))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise DuplicateError(
                "Subscription", f"{subscription.user_id}/{subscription.code.root}"
            ) from e
        return subscription

    async def update_invite_link(
        self, subscription_id: SubscriptionId, invite_link: str
    ) -> None:
        """Overwrite the invite link column only."""
        stmt = (
            update(subscriptions_table)
            .where(subscriptions_table.c.id == subscription_id)
            .values(invite_link=invite_link)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def update_status(
        self, subscription_id: SubscriptionId, status: SubscriptionStatus
    ) -> None:
        """Overwrite the status column only."""
        stmt = (
            update(subscriptions_table)
            .where(subscriptions_table.c.id == subscription_id)
            .values(status=status.value)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete(self, subscription_id: SubscriptionId) -> None:
        """Delete a subscription row."""
        stmt = delete(subscriptions_table).where(
            subscriptions_table.c.id == subscription_id
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def list_expirable(self, now: datetime) -> list[Subscription]:
        """List active subscriptions due for revocation.

        Uses index idx_subscriptions_status_expires_at.
        """
        stmt = (
            select(subscriptions_table)
            .where(
                and_(
                    subscriptions_table.c.status == SubscriptionStatus.ACTIVE.value,
                    subscriptions_table.c.expires_at <= now,
                )
            )
            .order_by(subscriptions_table.c.expires_at.asc())
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        return [row_to_subscription(dict(row)) for row in rows]
