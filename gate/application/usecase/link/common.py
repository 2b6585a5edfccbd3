"""Response models shared by the link use cases."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from gate.domain.model import InviteLink, TransitionResult
from gate.domain.value import LinkStatus, RemoteOutcome


class LinkView(BaseModel):
    """Invite link as returned to callers."""

    id: UUID
    group_id: str
    group_name: str | None = None
    invite_url: str
    access_code: str
    status: LinkStatus
    created_by: str
    reseller_code: str | None = None
    client_email: str | None = None
    client_id: str | None = None
    note: str | None = None
    receipt_ref: str | None = None
    created_at: datetime
    used_at: datetime | None = None
    expires_at: datetime | None = None

    @classmethod
    def from_link(cls, link: InviteLink) -> "LinkView":
        """Build a view from the domain entity."""
        return cls(
            id=link.id,
            group_id=link.group_id,
            group_name=link.group_name,
            invite_url=link.invite_url,
            access_code=link.access_code.root,
            status=link.status,
            created_by=link.created_by,
            reseller_code=link.reseller_code,
            client_email=link.client.email,
            client_id=link.client.external_id,
            note=link.client.note,
            receipt_ref=link.client.receipt_ref,
            created_at=link.created_at,
            used_at=link.used_at,
            expires_at=link.expires_at,
        )


class TransitionResponse(BaseModel):
    """Link after a transition plus the provider-side outcome."""

    link: LinkView
    local_committed: bool
    remote_outcome: RemoteOutcome
    remote_detail: str | None = None

    @classmethod
    def from_result(cls, result: TransitionResult) -> "TransitionResponse":
        """Build a response from a domain transition result."""
        return cls(
            link=LinkView.from_link(result.link),
            local_committed=result.local_committed,
            remote_outcome=result.remote_outcome,
            remote_detail=result.remote_detail,
        )
