"""Code registry domain service."""

import secrets
from datetime import datetime

import logfire

from gate.domain.error import (
    AlreadyUsedError,
    DuplicateError,
    InvalidDurationError,
    NotFoundError,
)
from gate.domain.model.code import Code
from gate.domain.repository import CodeRepository
from gate.domain.value import (
    CODE_ALPHABET,
    CODE_LENGTH,
    DurationClass,
    RedemptionCode,
    UserId,
)

from .base import Service


def generate_code() -> RedemptionCode:
    """Draw a random uppercase alphanumeric token."""
    return RedemptionCode(
        "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))
    )


class CodeService(Service):
    """Domain service owning the universe of redemption codes."""

    def __init__(
        self, code_repository: CodeRepository, allowed_durations: list[int]
    ) -> None:
        """Initialize code service.

        Args:
            code_repository: Code repository
            allowed_durations: Duration classes (days) that may be issued
        """
        self.code_repository = code_repository
        self.allowed_durations = [
            d for d in allowed_durations if d in DurationClass._value2member_map_
        ]

    def validate_duration(self, days: int) -> DurationClass:
        """Check a requested duration against the allowed set.

        Args:
            days: Requested duration in days

        Returns:
            The matching duration class

        Raises:
            InvalidDurationError: If the duration is not allowed
        """
        if days not in self.allowed_durations:
            raise InvalidDurationError(days, self.allowed_durations)
        return DurationClass(days)

    async def issue(self, days: int, now: datetime) -> Code:
        """Mint a new unused code.

        Tokens are redrawn until one is free; a collision reported on insert
        (another writer took the token in between) is redrawn too.

        Args:
            days: Duration class in days
            now: Creation instant

        Returns:
            Created code

        Raises:
            InvalidDurationError: If the duration is not allowed
        """
        duration = self.validate_duration(days)

        with logfire.span("code_service.issue", days=days):
            while True:
                token = generate_code()
                if await self.code_repository.exists(token):
                    logfire.warn("Generated code collided, redrawing")
                    continue
                try:
                    code = await self.code_repository.create(
                        Code(code=token, duration=duration, created_at=now)
                    )
                except DuplicateError:
                    logfire.warn("Generated code collided on insert, redrawing")
                    continue
                logfire.info("Code issued", code=token.root[:4] + "...", days=days)
                return code

    async def lookup(self, code: RedemptionCode) -> Code | None:
        """Get a code by token.

        Args:
            code: Redemption token

        Returns:
            Code if found, None otherwise
        """
        return await self.code_repository.find_by_code(code)

    async def mark_used(
        self, code: RedemptionCode, user_id: UserId, now: datetime
    ) -> Code:
        """Bind a code to its redeemer.

        Repeating the call for the same user is a no-op.

        Args:
            code: Redemption token
            user_id: Redeeming user
            now: Redemption instant

        Returns:
            The used code

        Raises:
            NotFoundError: If the code does not exist
            AlreadyUsedError: If another user already redeemed the code
        """
        with logfire.span(
            "code_service.mark_used", code=code.root[:4] + "...", user_id=user_id
        ):
            updated = await self.code_repository.mark_used(code, user_id, now)
            if updated is not None:
                logfire.info("Code marked used", user_id=user_id)
                return updated

            current = await self.code_repository.find_by_code(code)
            if current is None:
                raise NotFoundError("Code", code.root)
            if current.used_by == user_id:
                return current

            logfire.warn(
                "Code already used by another user",
                user_id=user_id,
                used_by=current.used_by,
            )
            raise AlreadyUsedError(code.root, current.used_by)
