"""PostgreSQL implementation of Code repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gate.domain.error import DuplicateError
from gate.domain.model import Code
from gate.domain.repository import CodeRepository
from gate.domain.value import RedemptionCode, UserId
from gate.persistence.mappers import code_to_dict, row_to_code
from gate.persistence.tables import codes_table


class PostgresCodeRepository(CodeRepository):
    """PostgreSQL implementation of CodeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_code(self, code: RedemptionCode) -> Optional[Code]:
        """Find a code by its token.

        Args:
            code: Redemption token to look up

        Returns:
            Code if found, None otherwise
        """
        stmt = select(codes_table).where(codes_table.c.code == code.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_code(dict(row)) if row else None

    async def exists(self, code: RedemptionCode) -> bool:
        """Check whether a token is taken without loading the row."""
        stmt = select(codes_table.c.code).where(codes_table.c.code == code.root)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def create(self, code: Code) -> Code:
        """Insert a new code.

        The insert runs in a savepoint so a collision leaves the surrounding
        transaction usable.

        Raises:
            DuplicateError: If the token is already taken
        """
        stmt = insert(codes_table).values(**code_to_dict(code))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise DuplicateError("Code", code.code.root) from e
        return code

    async def mark_used(
        self, code: RedemptionCode, user_id: UserId, used_at: datetime
    ) -> Optional[Code]:
        """Flip is_used with a single conditional UPDATE ... RETURNING."""
        stmt = (
            update(codes_table)
            .where(codes_table.c.code == code.root)
            .where(codes_table.c.is_used.is_(False))
            .values(is_used=True, used_by=user_id, used_at=used_at)
            .returning(*codes_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_code(dict(row)) if row else None
