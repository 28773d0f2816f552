"""Audit entry repository interface."""

from abc import ABC, abstractmethod

from gate.domain.model.audit_entry import AuditEntry
from gate.domain.value import AuditAction, UserId


class AuditRepository(ABC):
    """Repository for AuditEntry entity. Entries are append-only."""

    @abstractmethod
    async def append(self, entry: AuditEntry) -> AuditEntry:
        """Append an audit entry.

        Args:
            entry: The entry to append

        Returns:
            The appended entry
        """
        pass

    @abstractmethod
    async def find(
        self,
        actor_id: UserId | None = None,
        action: AuditAction | None = None,
        limit: int = 100,
    ) -> list[AuditEntry]:
        """Find entries, newest first.

        Args:
            actor_id: Optional actor filter
            action: Optional action filter
            limit: Maximum number of results

        Returns:
            List of matching entries
        """
        pass
