"""PostgreSQL implementation of AuditLog repository."""

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from gate.domain.model import AuditLogEntry
from gate.domain.repository import AuditLogRepository
from gate.domain.value import EntityType
from gate.persistence.mappers import audit_log_to_dict, row_to_audit_log
from gate.persistence.tables import audit_logs_table


class PostgresAuditLogRepository(AuditLogRepository):
    """PostgreSQL implementation of AuditLogRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def append(self, entry: AuditLogEntry) -> AuditLogEntry:
        """Insert an entry inside a SAVEPOINT.

        A failed insert rolls back to the savepoint only, leaving the
        request transaction usable.
        """
        async with self.session.begin_nested():
            await self.session.execute(
                insert(audit_logs_table).values(**audit_log_to_dict(entry))
            )
        return entry

    async def find_by_entity(
        self, entity_type: EntityType, entity_id: str
    ) -> list[AuditLogEntry]:
        """List entries about an entity, oldest first."""
        stmt = (
            select(audit_logs_table)
            .where(
                audit_logs_table.c.entity_type == entity_type.value,
                audit_logs_table.c.entity_id == entity_id,
            )
            .order_by(audit_logs_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_audit_log(dict(row)) for row in result.mappings().all()]

    async def exists_for_update(self, update_id: int) -> bool:
        """Check whether an entry records the provider update id."""
        stmt = (
            select(audit_logs_table.c.id)
            .where(audit_logs_table.c.details["update_id"].astext == str(update_id))
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None
