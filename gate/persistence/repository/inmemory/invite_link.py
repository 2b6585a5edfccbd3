"""In-memory invite link repository for testing."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError

from gate.domain.model import InviteLink
from gate.domain.repository import InviteLinkRepository
from gate.domain.value import AccessCode, InviteLinkId, LinkStatus

from .store import InMemoryStore


class InMemoryInviteLinkRepository(InviteLinkRepository):
    """In-memory implementation of InviteLinkRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_id(self, link_id: InviteLinkId) -> Optional[InviteLink]:
        """Find a link by ID."""
        return self._store.invite_links.get(link_id)

    async def find_by_access_code(self, code: AccessCode) -> Optional[InviteLink]:
        """Find the link holding an access code."""
        for link in self._store.invite_links.values():
            if link.access_code == code:
                return link
        return None

    async def find_by_invite_url(
        self, invite_url: str, statuses: frozenset[LinkStatus] | None = None
    ) -> Optional[InviteLink]:
        """Find a link by its exact invite URL."""
        for link in self._store.invite_links.values():
            if link.invite_url != invite_url:
                continue
            if statuses and link.status not in statuses:
                continue
            return link
        return None

    async def find_latest_used_in_group(
        self, group_id: str, since: datetime
    ) -> Optional[InviteLink]:
        """Find the group's most recently used link inside the window."""
        candidates = [
            link
            for link in self._store.invite_links.values()
            if link.group_id == group_id
            and link.status == LinkStatus.USED
            and link.used_at is not None
            and link.used_at >= since
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda link: link.used_at)

    async def find_expired_active(self, now: datetime) -> list[InviteLink]:
        """Find active links whose expiry has passed."""
        matches = [
            link
            for link in self._store.invite_links.values()
            if link.status == LinkStatus.ACTIVE and link.is_expired(now)
        ]
        matches.sort(key=lambda link: link.expires_at)
        return matches

    async def save(self, link: InviteLink) -> InviteLink:
        """Save a link (create or update).

        Raises:
            IntegrityError: If another link already holds the access code
        """
        for existing in self._store.invite_links.values():
            if existing.access_code == link.access_code and existing.id != link.id:
                raise IntegrityError("Duplicate access code", None, Exception())

        self._store.invite_links[link.id] = link
        return link

    async def transition(
        self,
        link_id: InviteLinkId,
        expected: frozenset[LinkStatus],
        target: LinkStatus,
        changes: dict[str, Any] | None = None,
    ) -> Optional[InviteLink]:
        """Status-guarded update."""
        link = self._store.invite_links.get(link_id)
        if link is None or link.status not in expected:
            return None

        updated = link.model_copy(update={**(changes or {}), "status": target})
        self._store.invite_links[link_id] = updated
        return updated

    async def delete(self, link_id: InviteLinkId) -> bool:
        """Remove a link record."""
        return self._store.invite_links.pop(link_id, None) is not None
