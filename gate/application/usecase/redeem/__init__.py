"""Redemption use cases."""

from gate.application.usecase.redeem.redeem_code import (
    RedeemCodeRequest,
    RedeemCodeResponse,
    RedeemCodeUseCase,
    RedemptionOutcome,
)

__all__ = [
    "RedeemCodeRequest",
    "RedeemCodeResponse",
    "RedeemCodeUseCase",
    "RedemptionOutcome",
]
