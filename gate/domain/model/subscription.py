"""Subscription entity."""

from datetime import datetime
from typing import Optional

from gate.domain.model.common import DomainModel
from gate.domain.value import RedemptionCode, SubscriptionId, SubscriptionStatus, UserId


class Subscription(DomainModel):
    """A user's access grant obtained by redeeming one code.

    Business rules:
    - One subscription per (user_id, code)
    - expires_at is fixed at creation and never extended
    - Status only moves active -> expired (banned is reserved)
    - invite_link holds the current link; a new link supersedes the old one
    """

    id: SubscriptionId
    user_id: UserId
    handle: str = ""
    code: RedemptionCode
    joined_at: datetime
    expires_at: datetime
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    invite_link: Optional[str] = None

    def is_lapsed(self, now: datetime) -> bool:
        """Whether the validity window has closed at ``now``."""
        return self.expires_at <= now

    def is_active_at(self, now: datetime) -> bool:
        """Whether the subscription grants access at ``now``."""
        return self.status == SubscriptionStatus.ACTIVE and not self.is_lapsed(now)
