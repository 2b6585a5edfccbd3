"""Tests for identity scopes."""

from uuid import uuid4

import pytest

from gate.domain.error import InsufficientScopeError
from gate.domain.model import AdminIdentity, EndUserIdentity, ResellerIdentity
from gate.domain.value import AccessCode, Capability, IdentityKind, InviteLinkId, LinkStatus


def test_admin_holds_management_capabilities():
    """Admins may manage links and credits."""
    admin = AdminIdentity(code=AccessCode("ADMIN001"), name="Owner")

    assert admin.kind == IdentityKind.ADMIN
    assert admin.can(Capability.MANAGE_LINKS)
    assert admin.can(Capability.MANAGE_CREDITS)
    assert not admin.can(Capability.ISSUE_OWN_GROUP)


def test_reseller_cannot_manage_links():
    """Resellers only issue into their group."""
    reseller = ResellerIdentity(
        code=AccessCode("RESELL01"), name="R", group_id="-100", credits=3
    )

    with pytest.raises(InsufficientScopeError) as exc_info:
        reseller.require(Capability.MANAGE_LINKS, "ban links")

    assert exc_info.value.kind == "insufficient_scope"
    assert "ban links" in exc_info.value.message


def test_end_user_only_sees_own_link():
    end_user = EndUserIdentity(
        code=AccessCode("USER0001"),
        link_id=InviteLinkId(uuid4()),
        link_status=LinkStatus.USED,
    )

    assert end_user.scope == frozenset({Capability.VIEW_OWN_LINK})
