"""Repository interfaces for Channel Gate domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from gate.domain.repository.audit import AuditRepository
from gate.domain.repository.code import CodeRepository
from gate.domain.repository.subscription import SubscriptionRepository

__all__ = [
    "AuditRepository",
    "CodeRepository",
    "SubscriptionRepository",
]
