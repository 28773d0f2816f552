"""PostgreSQL repository implementations."""

from gate.persistence.repository.audit import PostgresAuditRepository
from gate.persistence.repository.code import PostgresCodeRepository
from gate.persistence.repository.subscription import PostgresSubscriptionRepository

__all__ = [
    "PostgresAuditRepository",
    "PostgresCodeRepository",
    "PostgresSubscriptionRepository",
]
