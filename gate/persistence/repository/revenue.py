"""PostgreSQL implementation of Revenue repository."""

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from gate.domain.model import RevenueRecord
from gate.domain.repository import RevenueRepository
from gate.domain.value import AccessCode
from gate.persistence.mappers import revenue_to_dict, row_to_revenue
from gate.persistence.tables import revenue_table


class PostgresRevenueRepository(RevenueRepository):
    """PostgreSQL implementation of RevenueRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def save(self, record: RevenueRecord) -> RevenueRecord:
        """Insert a revenue record."""
        await self.session.execute(
            insert(revenue_table).values(**revenue_to_dict(record))
        )
        await self.session.flush()
        return record

    async def find_by_access_code(self, code: AccessCode) -> list[RevenueRecord]:
        """List revenue records of a code."""
        stmt = (
            select(revenue_table)
            .where(revenue_table.c.access_code == code.root)
            .order_by(revenue_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_revenue(dict(row)) for row in result.mappings().all()]

    async def delete_by_access_code(self, code: AccessCode) -> int:
        """Purge the revenue records of a code."""
        stmt = (
            delete(revenue_table)
            .where(revenue_table.c.access_code == code.root)
            .returning(revenue_table.c.id)
        )
        result = await self.session.execute(stmt)
        return len(result.all())
