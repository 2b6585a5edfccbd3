"""Messaging gateway contract.

The gateway is the messaging provider's link-management API. It is an
unreliable remote dependency: calls are bounded by a timeout, never
retried, and revocation never raises.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from gate.domain.value import RemoteOutcome
from gate.domain.value.common import ValueObject


class GatewayError(Exception):
    """Raised when the provider could not create a link."""

    def __init__(self, message: str, outcome: RemoteOutcome = RemoteOutcome.UNKNOWN):
        self.outcome = outcome
        super().__init__(message)


class GatewayLink(ValueObject):
    """Invite link created by the provider."""

    url: str
    expires_at: Optional[datetime] = None


class GatewayRevokeResult(ValueObject):
    """Outcome of a revoke call."""

    outcome: RemoteOutcome
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        """Whether the provider confirmed the link is no longer usable."""
        return self.outcome == RemoteOutcome.OK


class MessagingGateway(ABC):
    """Link management operations of the messaging provider."""

    @abstractmethod
    async def create_invite_link(
        self,
        group_id: str,
        member_limit: int,
        label: str,
        expires_at: datetime | None = None,
    ) -> GatewayLink:
        """Create an invite link for a group.

        Args:
            group_id: Provider group identifier
            member_limit: How many members may join through the link
            label: Human-readable name shown in the group's link list
            expires_at: Optional expiry to request from the provider

        Returns:
            The created link

        Raises:
            GatewayError: If the provider rejected the call or was unreachable
        """
        pass

    @abstractmethod
    async def revoke_invite_link(
        self, group_id: str, invite_url: str
    ) -> GatewayRevokeResult:
        """Revoke an invite link.

        An already revoked or expired link reports OK. Failures are returned
        as a warning or unknown outcome, never raised.

        Args:
            group_id: Provider group identifier
            invite_url: The link to revoke

        Returns:
            Revoke outcome
        """
        pass
