"""Invite link repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from gate.domain.model import InviteLink
from gate.domain.value import AccessCode, InviteLinkId, LinkStatus


class InviteLinkRepository(ABC):
    """Repository for InviteLink entity.

    Status changes go through transition(), a compare-and-swap on the
    current status. Concurrent transitions on one link therefore cannot
    both succeed.
    """

    @abstractmethod
    async def find_by_id(self, link_id: InviteLinkId) -> InviteLink | None:
        """Find a link by ID.

        Args:
            link_id: The link's unique identifier

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_access_code(self, code: AccessCode) -> InviteLink | None:
        """Find the link holding an access code.

        Args:
            code: Normalized access code

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_invite_url(
        self, invite_url: str, statuses: frozenset[LinkStatus] | None = None
    ) -> InviteLink | None:
        """Find a link by its provider-issued URL.

        Args:
            invite_url: Exact invite URL
            statuses: Optional status filter

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_latest_used_in_group(
        self, group_id: str, since: datetime
    ) -> InviteLink | None:
        """Find the most recently used link of a group.

        Args:
            group_id: Group identifier
            since: Only links with used_at at or after this instant qualify

        Returns:
            The link with the latest used_at, or None
        """
        pass

    @abstractmethod
    async def find_expired_active(self, now: datetime) -> list[InviteLink]:
        """Find active links whose expires_at is at or before now."""
        pass

    @abstractmethod
    async def save(self, link: InviteLink) -> InviteLink:
        """Save a link (create or update).

        Args:
            link: The link to save

        Returns:
            The saved link

        Raises:
            IntegrityError: If another link already holds the access code
        """
        pass

    @abstractmethod
    async def transition(
        self,
        link_id: InviteLinkId,
        expected: frozenset[LinkStatus],
        target: LinkStatus,
        changes: dict[str, Any] | None = None,
    ) -> InviteLink | None:
        """Move a link to a new status if it is still in an expected one.

        Args:
            link_id: Link to update
            expected: Statuses the link must currently be in
            target: New status
            changes: Other fields to set in the same update

        Returns:
            The updated link, or None if the link is missing or its status
            was not in expected
        """
        pass

    @abstractmethod
    async def delete(self, link_id: InviteLinkId) -> bool:
        """Remove a link record.

        Returns:
            True if a record was removed
        """
        pass
