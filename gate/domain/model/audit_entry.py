"""Audit entry entity."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from gate.domain.model.common import DomainModel, utcnow
from gate.domain.value import AuditAction, AuditEntryId, UserId


class AuditEntry(DomainModel):
    """Append-only record of a state transition or external call outcome.

    actor_id is None for events raised by the system itself (the sweeper,
    the standalone minting script).
    """

    id: AuditEntryId
    actor_id: Optional[UserId] = None
    action: AuditAction
    context: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)
