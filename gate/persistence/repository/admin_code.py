"""PostgreSQL implementation of AdminCode repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gate.domain.model import AdminCode
from gate.domain.repository import AdminCodeRepository
from gate.domain.value import AccessCode
from gate.persistence.mappers import admin_code_to_dict, row_to_admin_code
from gate.persistence.tables import admin_codes_table


class PostgresAdminCodeRepository(AdminCodeRepository):
    """PostgreSQL implementation of AdminCodeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_code(self, code: AccessCode) -> Optional[AdminCode]:
        """Find an admin code record by code."""
        stmt = select(admin_codes_table).where(admin_codes_table.c.code == code.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_admin_code(dict(row)) if row else None

    async def save(self, admin_code: AdminCode) -> AdminCode:
        """Save an admin code record (create or update)."""
        values = admin_code_to_dict(admin_code)

        existing = await self.session.execute(
            select(admin_codes_table.c.id).where(admin_codes_table.c.id == admin_code.id)
        )
        if existing.first():
            stmt = (
                update(admin_codes_table)
                .where(admin_codes_table.c.id == admin_code.id)
                .values(**values)
            )
        else:
            stmt = insert(admin_codes_table).values(**values)
        await self.session.execute(stmt)
        await self.session.flush()
        return admin_code

    async def touch_last_used(self, code: AccessCode, at: datetime) -> None:
        """Stamp last_used_at."""
        stmt = (
            update(admin_codes_table)
            .where(admin_codes_table.c.code == code.root)
            .values(last_used_at=at)
        )
        await self.session.execute(stmt)
