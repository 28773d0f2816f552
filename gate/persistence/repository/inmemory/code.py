"""In-memory code repository for testing."""

from datetime import datetime
from typing import Optional

from gate.domain.error import DuplicateError
from gate.domain.model.code import Code
from gate.domain.repository.code import CodeRepository
from gate.domain.value import RedemptionCode, UserId


class InMemoryCodeRepository(CodeRepository):
    """In-memory implementation of CodeRepository for testing."""

    def __init__(self) -> None:
        self._codes: dict[str, Code] = {}

    async def find_by_code(self, code: RedemptionCode) -> Optional[Code]:
        """Find a code by its token."""
        return self._codes.get(code.root)

    async def exists(self, code: RedemptionCode) -> bool:
        """Check whether a token is taken."""
        return code.root in self._codes

    async def create(self, code: Code) -> Code:
        """Insert a new code.

        Raises:
            DuplicateError: If the token is already taken
        """
        if code.code.root in self._codes:
            raise DuplicateError("Code", code.code.root)
        self._codes[code.code.root] = code
        return code

    async def mark_used(
        self, code: RedemptionCode, user_id: UserId, used_at: datetime
    ) -> Optional[Code]:
        """Check-and-set with no await in between."""
        current = self._codes.get(code.root)
        if current is None or current.is_used:
            return None
        updated = current.model_copy(
            update={"is_used": True, "used_by": user_id, "used_at": used_at}
        )
        self._codes[code.root] = updated
        return updated
