"""Tests for the invite link lifecycle table."""

import pytest

from gate.domain.error import InvalidTransitionError
from gate.domain.model.lifecycle import TRANSITIONS, next_status, source_statuses
from gate.domain.value import LinkStatus, LinkTrigger


class TestNextStatus:
    """Tests for next_status."""

    @pytest.mark.parametrize(
        ("status", "trigger", "expected"),
        [
            (LinkStatus.ACTIVE, LinkTrigger.MEMBER_JOINED, LinkStatus.USED),
            (LinkStatus.ACTIVE, LinkTrigger.MEMBER_LEFT, LinkStatus.CLOSED_BY_PROVIDER),
            (LinkStatus.USED, LinkTrigger.MEMBER_LEFT, LinkStatus.CLOSED_BY_PROVIDER),
            (LinkStatus.USED, LinkTrigger.REVOKE, LinkStatus.REVOKED),
            (LinkStatus.ACTIVE, LinkTrigger.BAN, LinkStatus.BANNED),
            (LinkStatus.BANNED, LinkTrigger.UNBAN, LinkStatus.REVOKED),
            (LinkStatus.CLOSED_BY_PROVIDER, LinkTrigger.REGENERATE, LinkStatus.ACTIVE),
            (LinkStatus.BANNED, LinkTrigger.REGENERATE, LinkStatus.ACTIVE),
            (LinkStatus.ACTIVE, LinkTrigger.EXPIRE, LinkStatus.EXPIRED),
            (LinkStatus.REVOKED, LinkTrigger.SUPERSEDE, LinkStatus.ACTIVE),
        ],
    )
    def test_defined_transitions(self, status, trigger, expected):
        """Defined pairs resolve to their target status."""
        assert next_status(status, trigger) == expected

    @pytest.mark.parametrize(
        ("status", "trigger"),
        [
            (LinkStatus.USED, LinkTrigger.MEMBER_JOINED),
            (LinkStatus.REVOKED, LinkTrigger.MEMBER_LEFT),
            (LinkStatus.CLOSED_BY_PROVIDER, LinkTrigger.MEMBER_LEFT),
            (LinkStatus.ACTIVE, LinkTrigger.REGENERATE),
            (LinkStatus.USED, LinkTrigger.REGENERATE),
            (LinkStatus.REVOKED, LinkTrigger.UNBAN),
            (LinkStatus.BANNED, LinkTrigger.SUPERSEDE),
            (LinkStatus.USED, LinkTrigger.EXPIRE),
        ],
    )
    def test_undefined_transitions_raise(self, status, trigger):
        """Undefined pairs are rejected."""
        with pytest.raises(InvalidTransitionError) as exc_info:
            next_status(status, trigger)

        assert exc_info.value.kind == "invalid_transition"
        assert exc_info.value.status == status.value

    def test_banned_only_leaves_through_admin_actions(self):
        """A banned link cannot be moved by provider events."""
        triggers = {trigger for (status, trigger) in TRANSITIONS if status == LinkStatus.BANNED}

        assert triggers == {LinkTrigger.UNBAN, LinkTrigger.REGENERATE}


class TestSourceStatuses:
    """Tests for source_statuses."""

    def test_member_left_sources(self):
        """A departure closes active and used links only."""
        assert source_statuses(LinkTrigger.MEMBER_LEFT) == frozenset(
            {LinkStatus.ACTIVE, LinkStatus.USED}
        )

    def test_regenerate_sources_exclude_live_links(self):
        """Regenerate never applies to a link a member can still use."""
        sources = source_statuses(LinkTrigger.REGENERATE)

        assert LinkStatus.ACTIVE not in sources
        assert LinkStatus.USED not in sources
        assert LinkStatus.BANNED in sources
