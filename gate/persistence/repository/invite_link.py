"""PostgreSQL implementation of InviteLink repository."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gate.domain.model import InviteLink
from gate.domain.repository import InviteLinkRepository
from gate.domain.value import AccessCode, InviteLinkId, LinkStatus
from gate.persistence.mappers import (
    invite_link_to_dict,
    link_changes_to_values,
    row_to_invite_link,
)
from gate.persistence.tables import invite_links_table


class PostgresInviteLinkRepository(InviteLinkRepository):
    """PostgreSQL implementation of InviteLinkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, link_id: InviteLinkId) -> Optional[InviteLink]:
        """Find a link by ID."""
        stmt = select(invite_links_table).where(invite_links_table.c.id == link_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite_link(dict(row)) if row else None

    async def find_by_access_code(self, code: AccessCode) -> Optional[InviteLink]:
        """Find the link holding an access code."""
        stmt = select(invite_links_table).where(
            invite_links_table.c.access_code == code.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite_link(dict(row)) if row else None

    async def find_by_invite_url(
        self, invite_url: str, statuses: frozenset[LinkStatus] | None = None
    ) -> Optional[InviteLink]:
        """Find a link by its exact invite URL."""
        stmt = select(invite_links_table).where(
            invite_links_table.c.invite_url == invite_url
        )
        if statuses:
            stmt = stmt.where(
                invite_links_table.c.status.in_([s.value for s in statuses])
            )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite_link(dict(row)) if row else None

    async def find_latest_used_in_group(
        self, group_id: str, since: datetime
    ) -> Optional[InviteLink]:
        """Find the group's most recently used link inside the window.

        Served by idx_invite_links_group_status_used_at.
        """
        stmt = (
            select(invite_links_table)
            .where(
                invite_links_table.c.group_id == group_id,
                invite_links_table.c.status == LinkStatus.USED.value,
                invite_links_table.c.used_at >= since,
            )
            .order_by(invite_links_table.c.used_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite_link(dict(row)) if row else None

    async def find_expired_active(self, now: datetime) -> list[InviteLink]:
        """Find active links whose expiry has passed."""
        stmt = (
            select(invite_links_table)
            .where(
                invite_links_table.c.status == LinkStatus.ACTIVE.value,
                invite_links_table.c.expires_at.is_not(None),
                invite_links_table.c.expires_at <= now,
            )
            .order_by(invite_links_table.c.expires_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_invite_link(dict(row)) for row in result.mappings().all()]

    async def save(self, link: InviteLink) -> InviteLink:
        """Save a link (create or update).

        Raises:
            IntegrityError: If another link already holds the access code
        """
        values = invite_link_to_dict(link)

        existing = await self.find_by_id(link.id)
        if existing:
            stmt = (
                update(invite_links_table)
                .where(invite_links_table.c.id == link.id)
                .values(**values)
            )
        else:
            stmt = insert(invite_links_table).values(**values)
        # A savepoint keeps the request transaction usable after a duplicate
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return link

    async def transition(
        self,
        link_id: InviteLinkId,
        expected: frozenset[LinkStatus],
        target: LinkStatus,
        changes: dict[str, Any] | None = None,
    ) -> Optional[InviteLink]:
        """Status-guarded update.

        UPDATE ... WHERE id = :id AND status IN (:expected) RETURNING *
        """
        values = link_changes_to_values(changes or {})
        values["status"] = target.value

        stmt = (
            update(invite_links_table)
            .where(
                invite_links_table.c.id == link_id,
                invite_links_table.c.status.in_([s.value for s in expected]),
            )
            .values(**values)
            .returning(*invite_links_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite_link(dict(row)) if row else None

    async def delete(self, link_id: InviteLinkId) -> bool:
        """Remove a link record."""
        stmt = (
            delete(invite_links_table)
            .where(invite_links_table.c.id == link_id)
            .returning(invite_links_table.c.id)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None
