"""Tests for membership event classification."""

from gate.domain.model import MembershipChange
from gate.domain.value import MemberStatus
from tests.conftest import make_event


class TestClassify:
    """Tests for MembershipEvent.classify."""

    def test_join_through_link_is_active(self):
        """left -> member with an invite link is a join."""
        event = make_event(
            MemberStatus.LEFT, MemberStatus.MEMBER, invite_url="https://t.me/+abc"
        )

        assert event.classify() == MembershipChange.BECAME_ACTIVE

    def test_join_without_link_is_ignored(self):
        """A join the provider does not attribute to a link is ignored."""
        event = make_event(MemberStatus.LEFT, MemberStatus.MEMBER)

        assert event.classify() == MembershipChange.IGNORED

    def test_left_and_kicked_are_inactive(self):
        """Leaving or being removed both count as departures."""
        left = make_event(MemberStatus.MEMBER, MemberStatus.LEFT)
        kicked = make_event(MemberStatus.RESTRICTED, MemberStatus.KICKED)

        assert left.classify() == MembershipChange.BECAME_INACTIVE
        assert kicked.classify() == MembershipChange.BECAME_INACTIVE

    def test_promotion_is_ignored(self):
        """member -> administrator is not a membership change."""
        event = make_event(
            MemberStatus.MEMBER,
            MemberStatus.ADMINISTRATOR,
            invite_url="https://t.me/+abc",
        )

        assert event.classify() == MembershipChange.IGNORED

    def test_left_to_kicked_is_ignored(self):
        """A ban of someone already gone is not a new departure."""
        event = make_event(MemberStatus.LEFT, MemberStatus.KICKED)

        assert event.classify() == MembershipChange.IGNORED
