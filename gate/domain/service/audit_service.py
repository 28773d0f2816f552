"""Audit log domain service."""

from datetime import datetime
from typing import Any
from uuid import uuid4

import logfire

from gate.domain.model.audit_entry import AuditEntry
from gate.domain.repository import AuditRepository
from gate.domain.value import AuditAction, AuditEntryId, UserId

from .base import Service


class AuditService(Service):
    """Append-only audit trail written by every component."""

    def __init__(self, audit_repository: AuditRepository) -> None:
        """Initialize audit service.

        Args:
            audit_repository: Audit repository
        """
        self.audit_repository = audit_repository

    async def record(
        self,
        action: AuditAction,
        actor_id: UserId | None,
        now: datetime,
        **context: Any,
    ) -> AuditEntry:
        """Append an audit entry.

        Args:
            action: What happened
            actor_id: Who caused it (None for the system)
            now: When it happened
            **context: Structured payload

        Returns:
            The appended entry
        """
        entry = AuditEntry(
            id=AuditEntryId(uuid4()),
            actor_id=actor_id,
            action=action,
            context=context,
            created_at=now,
        )
        saved = await self.audit_repository.append(entry)
        logfire.debug("Audit entry recorded", action=action.value, actor_id=actor_id)
        return saved

    async def list_entries(
        self,
        actor_id: UserId | None = None,
        action: AuditAction | None = None,
        limit: int = 100,
    ) -> list[AuditEntry]:
        """List audit entries, newest first."""
        return await self.audit_repository.find(actor_id, action, limit)
