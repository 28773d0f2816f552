"""Code use cases."""

from gate.application.usecase.code.issue_code import (
    IssueCodeOutcome,
    IssueCodeRequest,
    IssueCodeResponse,
    IssueCodeUseCase,
)

__all__ = [
    "IssueCodeOutcome",
    "IssueCodeRequest",
    "IssueCodeResponse",
    "IssueCodeUseCase",
]
