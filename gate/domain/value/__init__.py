"""Domain value objects for Channel Gate."""

from gate.domain.value.identifiers import (
    AuditEntryId,
    ChatId,
    SubscriptionId,
    UserId,
)
from gate.domain.value.types import (
    CODE_ALPHABET,
    CODE_LENGTH,
    CODE_PATTERN,
    AuditAction,
    DurationClass,
    RedemptionCode,
    SubscriptionStatus,
)

__all__ = [
    # Identifiers
    "UserId",
    "ChatId",
    "SubscriptionId",
    "AuditEntryId",
    # Types
    "AuditAction",
    "DurationClass",
    "RedemptionCode",
    "SubscriptionStatus",
    "CODE_ALPHABET",
    "CODE_LENGTH",
    "CODE_PATTERN",
]
