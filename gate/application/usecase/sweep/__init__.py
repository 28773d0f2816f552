"""Expiry use cases."""

from gate.application.usecase.sweep.expire_subscription import (
    ExpireSubscriptionRequest,
    ExpireSubscriptionResponse,
    ExpireSubscriptionUseCase,
    ExpiryOutcome,
)

__all__ = [
    "ExpireSubscriptionRequest",
    "ExpireSubscriptionResponse",
    "ExpireSubscriptionUseCase",
    "ExpiryOutcome",
]
