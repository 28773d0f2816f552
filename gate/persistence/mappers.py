"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from gate.domain.model import AuditEntry, Code, Subscription
from gate.domain.value import (
    AuditAction,
    AuditEntryId,
    DurationClass,
    RedemptionCode,
    SubscriptionId,
    SubscriptionStatus,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_code(row: Dict[str, Any]) -> Code:
    """Convert database row to Code domain model.

    Args:
        row: Database row as dict

    Returns:
        Code domain model
    """
    return Code(
        code=RedemptionCode(row["code"]),
        duration=DurationClass(row["duration_days"]),
        created_at=row["created_at"],
        is_used=row["is_used"],
        used_by=UserId(row["used_by"]) if row.get("used_by") is not None else None,
        used_at=row.get("used_at"),
    )


def code_to_dict(code: Code) -> Dict[str, Any]:
    """Convert Code domain model to database dict.

    Args:
        code: Code domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "code": code.code.root,
        "duration_days": int(code.duration),
        "created_at": code.created_at,
        "is_used": code.is_used,
        "used_by": code.used_by,
        "used_at": code.used_at,
    }


def row_to_subscription(row: Dict[str, Any]) -> Subscription:
    """Convert database row to Subscription domain model.

    Args:
        row: Database row as dict

    Returns:
        Subscription domain model
    """
    return Subscription(
        id=SubscriptionId(_uuid(row["id"])),
        user_id=UserId(row["user_id"]),
        handle=row.get("handle") or "",
        code=RedemptionCode(row["code"]),
        joined_at=row["joined_at"],
        expires_at=row["expires_at"],
        status=SubscriptionStatus(row["status"]),
        invite_link=row.get("invite_link"),
    )


def subscription_to_dict(subscription: Subscription) -> Dict[str, Any]:
    """Convert Subscription domain model to database dict."""
    return {
        "id": subscription.id,
        "user_id": subscription.user_id,
        "handle": subscription.handle,
        "code": subscription.code.root,
        "joined_at": subscription.joined_at,
        "expires_at": subscription.expires_at,
        "status": subscription.status.value,
        "invite_link": subscription.invite_link,
    }


def row_to_audit_entry(row: Dict[str, Any]) -> AuditEntry:
    """Convert database row to AuditEntry domain model."""
    return AuditEntry(
        id=AuditEntryId(_uuid(row["id"])),
        actor_id=UserId(row["actor_id"]) if row.get("actor_id") is not None else None,
        action=AuditAction(row["action"]),
        context=row.get("context") or {},
        created_at=row["created_at"],
    )


def audit_entry_to_dict(entry: AuditEntry) -> Dict[str, Any]:
    """Convert AuditEntry domain model to database dict."""
    return entry.model_dump(mode="json") | {
        "id": entry.id,
        "created_at": entry.created_at,
    }
