"""In-memory audit repository for testing."""

from typing import Optional

from gate.domain.model.audit_entry import AuditEntry
from gate.domain.repository.audit import AuditRepository
from gate.domain.value import AuditAction, UserId


class InMemoryAuditRepository(AuditRepository):
    """In-memory implementation of AuditRepository for testing."""

    def __init__(self) -> None:
        self._entries: list[AuditEntry] = []

    async def append(self, entry: AuditEntry) -> AuditEntry:
        """Append an audit entry."""
        self._entries.append(entry)
        return entry

    async def find(
        self,
        actor_id: Optional[UserId] = None,
        action: Optional[AuditAction] = None,
        limit: int = 100,
    ) -> list[AuditEntry]:
        """Find entries, newest first."""
        matches = []
        for entry in self._entries:
            if actor_id is not None and entry.actor_id != actor_id:
                continue
            if action is not None and entry.action != action:
                continue
            matches.append(entry)

        # Later inserts first among equal timestamps
        matches = list(reversed(matches))
        matches.sort(key=lambda e: e.created_at, reverse=True)
        return matches[:limit]
