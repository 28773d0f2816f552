"""Domain model entities for Channel Gate."""

from gate.domain.model.audit_entry import AuditEntry
from gate.domain.model.code import Code
from gate.domain.model.subscription import Subscription

__all__ = [
    "AuditEntry",
    "Code",
    "Subscription",
]
