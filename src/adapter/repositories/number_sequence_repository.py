"""SQLAlchemy implementation of NumberSequenceRepository

Hands out invoice and receipt numbers from a counter row that is
incremented with a single UPDATE, so concurrent transactions never
observe the same value.
"""

from datetime import datetime
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.number_sequence_repository import NumberSequenceRepository
from src.domain.number_sequence import NumberSequence


class SqlAlchemyNumberSequenceRepository(NumberSequenceRepository):
    """
    SQLAlchemy implementation of NumberSequenceRepository

    Note:
        The UPDATE takes the row lock; the value is only final once the
        caller's transaction commits. A rolled back transaction gives its
        value back.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def next_value(self, name: str, start: int = 1) -> int:
        stmt = (
            update(NumberSequence)
            .where(NumberSequence.name == name)
            .values(
                last_value=NumberSequence.last_value + 1,
                updated_at=datetime.utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)

        if result.rowcount == 0:
            # First allocation; a concurrent first insert fails on the primary key
            self.session.add(NumberSequence(name=name, last_value=start))
            await self.session.flush()
            return start

        value = await self.session.execute(
            select(NumberSequence.last_value).where(NumberSequence.name == name)
        )
        return int(value.scalar_one())

    async def peek_next_value(self, name: str, start: int = 1) -> int:
        result = await self.session.execute(
            select(NumberSequence.last_value).where(NumberSequence.name == name)
        )
        last_value = result.scalar_one_or_none()
        if last_value is None:
            return start
        return int(last_value) + 1
