"""Invite link entity.

An invite link is one granted access slot to a Telegram group. The
access code on the link is the end user's handle on it.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from gate.domain.model.common import DomainModel, utcnow
from gate.domain.value import AccessCode, InviteLinkId, LinkStatus


class ClientInfo(DomainModel):
    """Optional metadata about the client a link was sold to."""

    email: Optional[str] = None
    external_id: Optional[str] = None
    note: Optional[str] = None
    receipt_ref: Optional[str] = None


class InviteLink(DomainModel):
    """Invite link entity.

    Business rules:
    - access_code is unique across links; a reissue for an existing code
      supersedes the record in place
    - status only changes through the lifecycle table
    - reseller_code is set when the link was paid for with reseller credit
    """

    id: InviteLinkId
    group_id: str
    group_name: Optional[str] = None
    invite_url: str
    access_code: AccessCode
    status: LinkStatus = LinkStatus.ACTIVE
    created_by: str  # Code of the issuing admin or reseller
    reseller_code: Optional[str] = None
    client: ClientInfo = Field(default_factory=ClientInfo)
    created_at: datetime = Field(default_factory=utcnow)
    used_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        """Whether the provider-side expiry has passed."""
        return self.expires_at is not None and self.expires_at <= now
