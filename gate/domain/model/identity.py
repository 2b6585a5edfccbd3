"""Access identities.

Admins and resellers have their own records; an end user is identified
only by the access code of the single link they hold. All three share one
code namespace and resolve to a tagged identity variant carrying a
capability scope.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from gate.domain.error import InsufficientScopeError
from gate.domain.model.common import DomainModel, utcnow
from gate.domain.value import (
    AccessCode,
    AdminCodeId,
    Capability,
    IdentityKind,
    InviteLinkId,
    LinkStatus,
    ResellerId,
)


class AdminCode(DomainModel):
    """Admin access code record."""

    id: AdminCodeId
    code: AccessCode
    name: str
    is_active: bool = True
    last_used_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)


class Reseller(DomainModel):
    """Reseller record.

    The credit balance is the reseller's credit ledger: one credit pays for
    one issuance, and it never goes below zero.
    """

    id: ResellerId
    code: AccessCode
    name: str
    credits: int = Field(default=0, ge=0)
    group_id: str
    group_name: Optional[str] = None
    is_active: bool = True
    last_used_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)


ADMIN_SCOPE = frozenset(
    {
        Capability.ISSUE_ANY_GROUP,
        Capability.MANAGE_LINKS,
        Capability.MANAGE_CREDITS,
        Capability.VIEW_ANY_LINK,
    }
)
RESELLER_SCOPE = frozenset({Capability.ISSUE_OWN_GROUP, Capability.VIEW_ISSUED_LINKS})
END_USER_SCOPE = frozenset({Capability.VIEW_OWN_LINK})


class _IdentityBase(DomainModel):
    code: AccessCode
    scope: frozenset[Capability]

    def can(self, capability: Capability) -> bool:
        """Check whether the identity holds a capability."""
        return capability in self.scope

    def require(self, capability: Capability, action: str) -> None:
        """Ensure the identity holds a capability.

        Raises:
            InsufficientScopeError: If the capability is missing
        """
        if capability not in self.scope:
            raise InsufficientScopeError(action)


class AdminIdentity(_IdentityBase):
    """Admin identity with full scope."""

    kind: Literal[IdentityKind.ADMIN] = IdentityKind.ADMIN
    scope: frozenset[Capability] = ADMIN_SCOPE
    name: str


class ResellerIdentity(_IdentityBase):
    """Reseller identity, scoped to its assigned group."""

    kind: Literal[IdentityKind.RESELLER] = IdentityKind.RESELLER
    scope: frozenset[Capability] = RESELLER_SCOPE
    name: str
    group_id: str
    group_name: Optional[str] = None
    credits: int


class EndUserIdentity(_IdentityBase):
    """End user identity, scoped to a single link."""

    kind: Literal[IdentityKind.END_USER] = IdentityKind.END_USER
    scope: frozenset[Capability] = END_USER_SCOPE
    link_id: InviteLinkId
    link_status: LinkStatus


Identity = Annotated[
    Union[AdminIdentity, ResellerIdentity, EndUserIdentity],
    Field(discriminator="kind"),
]
