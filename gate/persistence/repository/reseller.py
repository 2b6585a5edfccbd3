"""PostgreSQL implementation of Reseller repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gate.domain.model import Reseller
from gate.domain.repository import ResellerRepository
from gate.domain.value import AccessCode
from gate.persistence.mappers import reseller_to_dict, row_to_reseller
from gate.persistence.tables import resellers_table


class PostgresResellerRepository(ResellerRepository):
    """PostgreSQL implementation of ResellerRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_code(self, code: AccessCode) -> Optional[Reseller]:
        """Find a reseller by code."""
        stmt = select(resellers_table).where(resellers_table.c.code == code.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_reseller(dict(row)) if row else None

    async def save(self, reseller: Reseller) -> Reseller:
        """Save a reseller (create or update).

        The credits column is only written on insert; balance changes go
        through try_debit/credit.
        """
        values = reseller_to_dict(reseller)

        existing = await self.session.execute(
            select(resellers_table.c.id).where(resellers_table.c.id == reseller.id)
        )
        if existing.first():
            values.pop("credits")
            stmt = (
                update(resellers_table)
                .where(resellers_table.c.id == reseller.id)
                .values(**values)
            )
        else:
            stmt = insert(resellers_table).values(**values)
        await self.session.execute(stmt)
        await self.session.flush()
        return reseller

    async def try_debit(self, code: AccessCode, amount: int) -> Optional[int]:
        """Atomically decrement credits if the balance covers the amount.

        A single conditional UPDATE; zero affected rows means unknown
        reseller or insufficient balance.
        """
        stmt = (
            update(resellers_table)
            .where(
                resellers_table.c.code == code.root,
                resellers_table.c.credits >= amount,
            )
            .values(credits=resellers_table.c.credits - amount)
            .returning(resellers_table.c.credits)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def credit(self, code: AccessCode, amount: int) -> Optional[int]:
        """Atomically increment credits."""
        stmt = (
            update(resellers_table)
            .where(resellers_table.c.code == code.root)
            .values(credits=resellers_table.c.credits + amount)
            .returning(resellers_table.c.credits)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def touch_last_used(self, code: AccessCode, at: datetime) -> None:
        """Stamp last_used_at."""
        stmt = (
            update(resellers_table)
            .where(resellers_table.c.code == code.root)
            .values(last_used_at=at)
        )
        await self.session.execute(stmt)
