"""In-memory repository implementations for testing."""

from .audit import InMemoryAuditRepository
from .code import InMemoryCodeRepository
from .subscription import InMemorySubscriptionRepository

__all__ = [
    "InMemoryAuditRepository",
    "InMemoryCodeRepository",
    "InMemorySubscriptionRepository",
]
