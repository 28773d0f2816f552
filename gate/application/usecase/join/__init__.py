"""Join request use cases."""

from gate.application.usecase.join.arbitrate_join_request import (
    ArbitrateJoinRequestUseCase,
    JoinDecision,
    JoinRequestDecisionRequest,
    JoinRequestDecisionResponse,
)

__all__ = [
    "ArbitrateJoinRequestUseCase",
    "JoinDecision",
    "JoinRequestDecisionRequest",
    "JoinRequestDecisionResponse",
]
