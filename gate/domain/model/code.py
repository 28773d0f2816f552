"""Code entity.

A code is a one-time token an administrator hands out; redeeming it grants
a subscription of the code's duration to the first user who presents it.
"""

from datetime import datetime, timedelta
from typing import Optional

from pydantic import Field

from gate.domain.model.common import DomainModel, utcnow
from gate.domain.value import DurationClass, RedemptionCode, UserId


class Code(DomainModel):
    """Code entity.

    Business rules:
    - is_used flips from False to True exactly once
    - used_by is set together with is_used and never changes afterwards
    - Codes are never deleted
    """

    code: RedemptionCode
    duration: DurationClass
    created_at: datetime = Field(default_factory=utcnow)
    is_used: bool = False
    used_by: Optional[UserId] = None
    used_at: Optional[datetime] = None

    def expiry_from(self, start: datetime) -> datetime:
        """Instant at which a subscription started at ``start`` lapses."""
        return start + timedelta(days=int(self.duration))

    def is_used_by(self, user_id: UserId) -> bool:
        """Whether this code was redeemed by ``user_id``."""
        return self.is_used and self.used_by == user_id
