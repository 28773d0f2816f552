"""Domain value objects for Channel Gate.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum, IntEnum

from pydantic import field_validator

from gate.domain.value.common import RootValueObject

CODE_LENGTH = 10
CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
CODE_PATTERN = re.compile(r"^[A-Za-z0-9]{10}$")


class DurationClass(IntEnum):
    """Subscription length granted by a code, in days."""

    DAYS_15 = 15
    DAYS_30 = 30
    DAYS_60 = 60


class SubscriptionStatus(str, Enum):
    """Status of a subscription.

    Status only moves forward: active -> expired. Banned is a terminal
    override reserved for moderation outside the bot flows.
    """

    ACTIVE = "active"
    EXPIRED = "expired"
    BANNED = "banned"


class AuditAction(str, Enum):
    """Kind of event recorded in the audit log."""

    CODE_GENERATED = "code_generated"
    CODE_REJECTED = "code_rejected"
    CODE_REDEEMED = "code_redeemed"
    REDEMPTION_REJECTED = "redemption_rejected"
    REDEMPTION_FAILED = "redemption_failed"
    LINK_GENERATED = "link_generated"
    LINK_REGENERATED = "link_regenerated"
    SUBSCRIPTION_EXPIRED = "subscription_expired"
    JOIN_APPROVED = "join_approved"
    JOIN_DECLINED = "join_declined"
    JOIN_FAILED = "join_failed"
    EXPIRED_KICKED = "expired_kicked"
    EXPIRED_KICK_FAILED = "expired_kick_failed"


class RedemptionCode(RootValueObject[str]):
    """One-time redemption token.

    Exactly 10 characters from [A-Za-z0-9]. Issued codes are uppercase, but
    lookups are exact, so a lowercase variant is a different (unknown) code.
    """

    @field_validator("root")
    @classmethod
    def validate_code_format(cls, v: str) -> str:
        """Validate code format."""
        if not CODE_PATTERN.match(v):
            raise ValueError("Code must be exactly 10 characters from [A-Za-z0-9]")
        return v
