"""Issue code use case."""

from datetime import datetime
from enum import Enum
from typing import Optional

import logfire
from pydantic import BaseModel

from gate.application.usecase.base import BaseUseCase
from gate.config import Settings
from gate.domain.error import InvalidDurationError
from gate.domain.service import AuditService, CodeService
from gate.domain.value import AuditAction, UserId


class IssueCodeOutcome(str, Enum):
    """Result of an issue-code attempt."""

    ISSUED = "issued"
    NOT_ADMIN = "not_admin"
    INVALID_DURATION = "invalid_duration"


class IssueCodeRequest(BaseModel):
    """Request to mint a code.

    requester_id is None when minting from the command line (system actor).
    """

    requester_id: Optional[int] = None
    duration_days: int
    now: datetime


class IssueCodeResponse(BaseModel):
    """Response after an issue-code attempt."""

    outcome: IssueCodeOutcome
    message: str
    code: Optional[str] = None
    duration_days: Optional[int] = None


class IssueCodeUseCase(BaseUseCase[IssueCodeRequest, IssueCodeResponse]):
    """Use case for minting a new redemption code."""

    def __init__(
        self,
        code_service: CodeService,
        audit_service: AuditService,
        settings: Settings,
    ) -> None:
        """Initialize use case.

        Args:
            code_service: Code domain service
            audit_service: Audit domain service
            settings: Application settings
        """
        self.code_service = code_service
        self.audit_service = audit_service
        self.settings = settings

    def is_admin(self, user_id: int) -> bool:
        """Whether ``user_id`` may mint codes."""
        return user_id == self.settings.telegram.admin_id

    async def execute(self, request: IssueCodeRequest) -> IssueCodeResponse:
        """Execute issue code use case.

        Args:
            request: Issue code request

        Returns:
            Outcome with the minted token on success
        """
        actor = UserId(request.requester_id) if request.requester_id is not None else None

        with logfire.span(
            "issue_code", requester_id=actor, duration_days=request.duration_days
        ):
            if actor is not None and not self.is_admin(actor):
                logfire.warn("Non-admin tried to issue a code", requester_id=actor)
                await self.audit_service.record(
                    AuditAction.CODE_REJECTED,
                    actor,
                    request.now,
                    days=request.duration_days,
                    reason="not_admin",
                )
                return IssueCodeResponse(
                    outcome=IssueCodeOutcome.NOT_ADMIN,
                    message="Only the admin can generate codes.",
                )

            try:
                code = await self.code_service.issue(request.duration_days, request.now)
            except InvalidDurationError as e:
                await self.audit_service.record(
                    AuditAction.CODE_REJECTED,
                    actor,
                    request.now,
                    days=request.duration_days,
                    reason="invalid_duration",
                )
                allowed = " / ".join(str(d) for d in e.allowed)
                return IssueCodeResponse(
                    outcome=IssueCodeOutcome.INVALID_DURATION,
                    message=f"Duration must be one of: {allowed}",
                )

            await self.audit_service.record(
                AuditAction.CODE_GENERATED,
                actor,
                request.now,
                code=code.code.root,
                days=int(code.duration),
            )

            return IssueCodeResponse(
                outcome=IssueCodeOutcome.ISSUED,
                message=(
                    f"Code created:\n{code.code.root}\n{int(code.duration)} days"
                ),
                code=code.code.root,
                duration_days=int(code.duration),
            )
