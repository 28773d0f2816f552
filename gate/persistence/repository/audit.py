"""PostgreSQL implementation of Audit repository."""

from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from gate.domain.model import AuditEntry
from gate.domain.repository import AuditRepository
from gate.domain.value import AuditAction, UserId
from gate.persistence.mappers import audit_entry_to_dict, row_to_audit_entry
from gate.persistence.tables import audit_entries_table


class PostgresAuditRepository(AuditRepository):
    """PostgreSQL implementation of AuditRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def append(self, entry: AuditEntry) -> AuditEntry:
        """Insert an audit entry."""
        stmt = insert(audit_entries_table).values(**audit_entry_to_dict(entry))
        await self.session.execute(stmt)
        await self.session.flush()
        return entry

    async def find(
        self,
        actor_id: Optional[UserId] = None,
        action: Optional[AuditAction] = None,
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
        stmt = (
            select(audit_entries_table)
            .order_by(audit_entries_table.c.created_at.desc())
            .limit(limit)
        )

        if actor_id is not None:
            stmt = stmt.where(audit_entries_table.c.actor_id == actor_id)
        if action:
            stmt = stmt.where(audit_entries_table.c.action == action.value)

        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        return [row_to_audit_entry(dict(row)) for row in rows]
