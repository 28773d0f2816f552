"""Code repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from gate.domain.model.code import Code
from gate.domain.value import RedemptionCode, UserId


class CodeRepository(ABC):
    """Repository for Code entity.

    Defines the contract for code persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_code(self, code: RedemptionCode) -> Code | None:
        """Find a code by its token.

        Args:
            code: The redemption token

        Returns:
            The code if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, code: RedemptionCode) -> bool:
        """Check whether a token is already taken.

        Args:
            code: The redemption token

        Returns:
            True if a code with this token exists
        """
        pass

    @abstractmethod
    async def create(self, code: Code) -> Code:
        """Insert a new code.

        Args:
            code: The code to insert

        Returns:
            The inserted code

        Raises:
            DuplicateError: If the token is already taken
        """
        pass

    @abstractmethod
    async def mark_used(
        self, code: RedemptionCode, user_id: UserId, used_at: datetime
    ) -> Code | None:
        """Atomically mark an unused code as used by ``user_id``.

        This is a single compare-and-set keyed on ``is_used = false``. It
        never overwrites a code that is already used.

        Args:
            code: The redemption token
            user_id: The redeeming user
            used_at: Redemption instant

        Returns:
            The updated code if this call won, None if the code is missing
            or was already used
        """
        pass
