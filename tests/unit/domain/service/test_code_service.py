"""Unit tests for CodeService."""

from datetime import timedelta

import pytest

from gate.domain.error import AlreadyUsedError, InvalidDurationError, NotFoundError
from gate.domain.repository import CodeRepository
from gate.domain.service import CodeService
from gate.domain.service.code_service import generate_code
from gate.domain.value import CODE_PATTERN, DurationClass, RedemptionCode, UserId
from tests.factories import T0, make_code
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGenerateCode:
    """Tests for token generation."""

    def test_tokens_are_ten_uppercase_alphanumerics(self):
        for _ in range(50):
            token = generate_code()
            assert CODE_PATTERN.match(token.root)
            assert token.root == token.root.upper()


class TestIssue:
    """Tests for issue method."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("days", [15, 30, 60])
    async def test_issue_persists_unused_code(self, unit_env, days):
        """Issuing stores an unused code of the requested duration."""
        # Arrange
        code_service = await unit_env.get(CodeService)
        code_repo = await unit_env.get(CodeRepository)

        # Act
        code = await code_service.issue(days, T0)

        # Assert
        assert code.duration == DurationClass(days)
        assert code.is_used is False
        assert code.used_by is None
        assert code.created_at == T0
        assert await code_repo.find_by_code(code.code) == code

    @pytest.mark.asyncio
    @pytest.mark.parametrize("days", [0, 7, 45, 90, -15])
    async def test_issue_rejects_other_durations(self, unit_env, days):
        code_service = await unit_env.get(CodeService)

        with pytest.raises(InvalidDurationError) as exc_info:
            await code_service.issue(days, T0)

        assert exc_info.value.days == days
        assert exc_info.value.allowed == [15, 30, 60]

    @pytest.mark.asyncio
    async def test_issue_redraws_on_collision(self, unit_env, monkeypatch):
        """A token already in storage is never handed out twice."""
        # Arrange
        code_service = await unit_env.get(CodeService)
        code_repo = await unit_env.get(CodeRepository)
        await code_repo.create(make_code("AAAAAAAAAA"))

        draws = iter([RedemptionCode("AAAAAAAAAA"), RedemptionCode("BBBBBBBBBB")])
        monkeypatch.setattr(
            "gate.domain.service.code_service.generate_code", lambda: next(draws)
        )

        # Act
        code = await code_service.issue(30, T0)

        # Assert
        assert code.code.root == "BBBBBBBBBB"

    @pytest.mark.asyncio
    async def test_issued_codes_are_distinct(self, unit_env):
        code_service = await unit_env.get(CodeService)

        tokens = {(await code_service.issue(15, T0)).code.root for _ in range(20)}

        assert len(tokens) == 20


class TestLookup:
    """Tests for lookup method."""

    @pytest.mark.asyncio
    async def test_lookup_unknown_returns_none(self, unit_env):
        code_service = await unit_env.get(CodeService)

        assert await code_service.lookup(RedemptionCode("ZZZZZZZZZZ")) is None

    @pytest.mark.asyncio
    async def test_lookup_is_case_sensitive(self, unit_env):
        code_service = await unit_env.get(CodeService)
        code_repo = await unit_env.get(CodeRepository)
        await code_repo.create(make_code("ABCD123456"))

        assert await code_service.lookup(RedemptionCode("abcd123456")) is None
        assert await code_service.lookup(RedemptionCode("ABCD123456")) is not None


class TestMarkUsed:
    """Tests for mark_used method."""

    @pytest.mark.asyncio
    async def test_first_user_wins(self, unit_env):
        """The second user gets AlreadyUsedError and used_by stays the first."""
        # Arrange
        code_service = await unit_env.get(CodeService)
        code_repo = await unit_env.get(CodeRepository)
        await code_repo.create(make_code())
        token = RedemptionCode("ABCD123456")

        # Act
        first = await code_service.mark_used(token, UserId(100), T0)
        with pytest.raises(AlreadyUsedError) as exc_info:
            await code_service.mark_used(token, UserId(200), T0 + timedelta(minutes=1))

        # Assert
        assert first.is_used is True
        assert first.used_by == 100
        assert first.used_at == T0
        assert exc_info.value.used_by == 100
        stored = await code_repo.find_by_code(token)
        assert stored.used_by == 100
        assert stored.used_at == T0

    @pytest.mark.asyncio
    async def test_same_user_is_idempotent(self, unit_env):
        code_service = await unit_env.get(CodeService)
        code_repo = await unit_env.get(CodeRepository)
        await code_repo.create(make_code())
        token = RedemptionCode("ABCD123456")

        await code_service.mark_used(token, UserId(100), T0)
        again = await code_service.mark_used(
            token, UserId(100), T0 + timedelta(days=1)
        )

        assert again.used_by == 100
        # First redemption instant is kept
        assert again.used_at == T0

    @pytest.mark.asyncio
    async def test_unknown_code_raises_not_found(self, unit_env):
        code_service = await unit_env.get(CodeService)

        with pytest.raises(NotFoundError):
            await code_service.mark_used(RedemptionCode("ZZZZZZZZZZ"), UserId(1), T0)
