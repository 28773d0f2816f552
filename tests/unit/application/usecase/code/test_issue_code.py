"""Unit tests for IssueCodeUseCase."""

import pytest

from gate.application.usecase.code import (
    IssueCodeOutcome,
    IssueCodeRequest,
    IssueCodeUseCase,
)
from gate.domain.repository import AuditRepository, CodeRepository
from gate.domain.value import AuditAction, RedemptionCode
from tests.factories import ADMIN_ID, T0
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestIssueCode:
    """Tests for IssueCodeUseCase."""

    @pytest.mark.asyncio
    async def test_admin_issues_code(self, unit_env):
        # Arrange
        use_case = await unit_env.get(IssueCodeUseCase)
        code_repo = await unit_env.get(CodeRepository)
        audit_repo = await unit_env.get(AuditRepository)

        # Act
        response = await use_case.execute(
            IssueCodeRequest(requester_id=ADMIN_ID, duration_days=30, now=T0)
        )

        # Assert
        assert response.outcome == IssueCodeOutcome.ISSUED
        assert response.duration_days == 30
        assert response.code in response.message
        assert "30 days" in response.message

        stored = await code_repo.find_by_code(RedemptionCode(response.code))
        assert stored is not None
        assert stored.is_used is False

        (entry,) = await audit_repo.find(action=AuditAction.CODE_GENERATED)
        assert entry.actor_id == ADMIN_ID
        assert entry.context == {"code": response.code, "days": 30}

    @pytest.mark.asyncio
    async def test_non_admin_is_refused(self, unit_env):
        use_case = await unit_env.get(IssueCodeUseCase)
        audit_repo = await unit_env.get(AuditRepository)

        response = await use_case.execute(
            IssueCodeRequest(requester_id=ADMIN_ID + 1, duration_days=30, now=T0)
        )

        assert response.outcome == IssueCodeOutcome.NOT_ADMIN
        assert response.code is None
        assert await audit_repo.find(action=AuditAction.CODE_GENERATED) == []
        (entry,) = await audit_repo.find(action=AuditAction.CODE_REJECTED)
        assert entry.actor_id == ADMIN_ID + 1
        assert entry.context == {"days": 30, "reason": "not_admin"}

    @pytest.mark.asyncio
    async def test_invalid_duration_is_audited(self, unit_env):
        use_case = await unit_env.get(IssueCodeUseCase)
        audit_repo = await unit_env.get(AuditRepository)

        response = await use_case.execute(
            IssueCodeRequest(requester_id=ADMIN_ID, duration_days=45, now=T0)
        )

        assert response.outcome == IssueCodeOutcome.INVALID_DURATION
        assert "15 / 30 / 60" in response.message
        (entry,) = await audit_repo.find(action=AuditAction.CODE_REJECTED)
        assert entry.context["days"] == 45

    @pytest.mark.asyncio
    async def test_system_actor_may_issue(self, unit_env):
        """The command-line utility issues without a Telegram identity."""
        use_case = await unit_env.get(IssueCodeUseCase)
        audit_repo = await unit_env.get(AuditRepository)

        response = await use_case.execute(
            IssueCodeRequest(requester_id=None, duration_days=60, now=T0)
        )

        assert response.outcome == IssueCodeOutcome.ISSUED
        (entry,) = await audit_repo.find(action=AuditAction.CODE_GENERATED)
        assert entry.actor_id is None
