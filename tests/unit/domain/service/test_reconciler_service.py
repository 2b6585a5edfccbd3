"""Unit tests for ReconcilerService."""

from datetime import timedelta

import pytest

from gate.adapter.telegram.client import TelegramGateway
from gate.domain.model.common import utcnow
from gate.domain.repository import InviteLinkRepository
from gate.domain.service import (
    AuditService,
    IdentityService,
    LinkService,
    ReconcileOutcome,
    ReconcilerService,
)
from gate.domain.value import (
    AccessCode,
    AuditAction,
    EntityType,
    LinkStatus,
    MemberStatus,
    RemoteOutcome,
)
from tests.conftest import ADMIN_CODE, GROUP_ID, make_event, seed_admin
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def issue_link(env, code: str = "ABC12345"):
    await seed_admin(env)
    identity_service = await env.get(IdentityService)
    link_service = await env.get(LinkService)
    admin = await identity_service.resolve(ADMIN_CODE)
    result = await link_service.issue(
        admin, group_id=GROUP_ID, access_code=AccessCode(code)
    )
    return result.link


async def history(env, link_id):
    audit_service = await env.get(AuditService)
    return await audit_service.history(EntityType.INVITE_LINK, str(link_id))


class TestJoin:
    """Tests for member joins."""

    @pytest.mark.asyncio
    async def test_join_marks_link_used(self, unit_env):
        """Issue, then a join through the URL: used, with one member_joined entry."""
        link = await issue_link(unit_env)
        reconciler = await unit_env.get(ReconcilerService)
        link_repo = await unit_env.get(InviteLinkRepository)

        outcome = await reconciler.on_membership_event(
            make_event(
                MemberStatus.LEFT,
                MemberStatus.MEMBER,
                invite_url=link.invite_url,
                update_id=1,
            )
        )

        assert outcome == ReconcileOutcome.LINK_USED
        stored = await link_repo.find_by_id(link.id)
        assert stored.status == LinkStatus.USED
        assert stored.used_at is not None
        joined = [e for e in await history(unit_env, link.id) if e.action == AuditAction.MEMBER_JOINED]
        assert len(joined) == 1
        assert joined[0].details["access_code"] == "ABC12345"
        assert joined[0].details["user_id"] == 4242
        assert joined[0].performed_by == "telegram-webhook"

    @pytest.mark.asyncio
    async def test_join_through_unknown_url_is_no_op(self, unit_env):
        await issue_link(unit_env)
        reconciler = await unit_env.get(ReconcilerService)

        outcome = await reconciler.on_membership_event(
            make_event(
                MemberStatus.LEFT,
                MemberStatus.MEMBER,
                invite_url="https://t.me/+someoneelse",
            )
        )

        assert outcome == ReconcileOutcome.NO_OP

    @pytest.mark.asyncio
    async def test_join_on_revoked_link_is_no_op(self, unit_env):
        link = await issue_link(unit_env)
        identity_service = await unit_env.get(IdentityService)
        link_service = await unit_env.get(LinkService)
        reconciler = await unit_env.get(ReconcilerService)
        link_repo = await unit_env.get(InviteLinkRepository)
        admin = await identity_service.resolve(ADMIN_CODE)
        await link_service.revoke(admin, link.id)

        outcome = await reconciler.on_membership_event(
            make_event(MemberStatus.LEFT, MemberStatus.MEMBER, invite_url=link.invite_url)
        )

        assert outcome == ReconcileOutcome.NO_OP
        assert (await link_repo.find_by_id(link.id)).status == LinkStatus.REVOKED


class TestLeave:
    """Tests for member departures."""

    @pytest.mark.asyncio
    async def test_leave_with_url_closes_link(self, unit_env):
        """Join then leave through the same URL: closed, one auto revoke entry."""
        link = await issue_link(unit_env)
        reconciler = await unit_env.get(ReconcilerService)
        link_repo = await unit_env.get(InviteLinkRepository)
        gateway = await unit_env.get(TelegramGateway)
        await reconciler.on_membership_event(
            make_event(
                MemberStatus.LEFT,
                MemberStatus.MEMBER,
                invite_url=link.invite_url,
                update_id=1,
            )
        )

        outcome = await reconciler.on_membership_event(
            make_event(
                MemberStatus.MEMBER,
                MemberStatus.LEFT,
                invite_url=link.invite_url,
                update_id=2,
            )
        )

        assert outcome == ReconcileOutcome.LINK_CLOSED
        assert (await link_repo.find_by_id(link.id)).status == LinkStatus.CLOSED_BY_PROVIDER
        assert gateway.revoked == [(GROUP_ID, link.invite_url)]
        closed = [
            e
            for e in await history(unit_env, link.id)
            if e.action == AuditAction.AUTO_REVOKE_ON_LEAVE
        ]
        assert len(closed) == 1
        assert closed[0].details["reason"] == "User left group"
        assert closed[0].details["matched_by"] == "invite_url"
        assert closed[0].details["telegram_revoked"] is True

    @pytest.mark.asyncio
    async def test_leave_closes_active_link_when_join_was_missed(self, unit_env):
        link = await issue_link(unit_env)
        reconciler = await unit_env.get(ReconcilerService)
        link_repo = await unit_env.get(InviteLinkRepository)

        outcome = await reconciler.on_membership_event(
            make_event(MemberStatus.MEMBER, MemberStatus.KICKED, invite_url=link.invite_url)
        )

        assert outcome == ReconcileOutcome.LINK_CLOSED
        assert (await link_repo.find_by_id(link.id)).status == LinkStatus.CLOSED_BY_PROVIDER

    @pytest.mark.asyncio
    async def test_leave_commits_when_revoke_fails(self, unit_env):
        link = await issue_link(unit_env)
        reconciler = await unit_env.get(ReconcilerService)
        link_repo = await unit_env.get(InviteLinkRepository)
        gateway = await unit_env.get(TelegramGateway)
        gateway.revoke_outcome = RemoteOutcome.UNKNOWN

        outcome = await reconciler.on_membership_event(
            make_event(MemberStatus.MEMBER, MemberStatus.LEFT, invite_url=link.invite_url)
        )

        assert outcome == ReconcileOutcome.LINK_CLOSED
        assert (await link_repo.find_by_id(link.id)).status == LinkStatus.CLOSED_BY_PROVIDER
        entry = (await history(unit_env, link.id))[-1]
        assert entry.details["telegram_revoked"] is False
        assert entry.details["remote_outcome"] == "unknown"

    @pytest.mark.asyncio
    async def test_leave_without_url_uses_recent_join(self, unit_env):
        """A departure without a URL is blamed on the group's latest join."""
        older = await issue_link(unit_env, code="OLDER123")
        newer = await issue_link(unit_env, code="NEWER123")
        reconciler = await unit_env.get(ReconcilerService)
        link_repo = await unit_env.get(InviteLinkRepository)
        now = utcnow()
        await reconciler.on_membership_event(
            make_event(
                MemberStatus.LEFT,
                MemberStatus.MEMBER,
                invite_url=older.invite_url,
                occurred_at=now - timedelta(minutes=30),
            )
        )
        await reconciler.on_membership_event(
            make_event(
                MemberStatus.LEFT,
                MemberStatus.MEMBER,
                invite_url=newer.invite_url,
                occurred_at=now - timedelta(minutes=5),
            )
        )

        outcome = await reconciler.on_membership_event(
            make_event(MemberStatus.MEMBER, MemberStatus.LEFT, occurred_at=now)
        )

        assert outcome == ReconcileOutcome.LINK_CLOSED
        assert (await link_repo.find_by_id(newer.id)).status == LinkStatus.CLOSED_BY_PROVIDER
        assert (await link_repo.find_by_id(older.id)).status == LinkStatus.USED
        entry = (await history(unit_env, newer.id))[-1]
        assert entry.details["matched_by"] == "recent_join"

    @pytest.mark.asyncio
    async def test_leave_outside_window_is_recorded_against_group(self, unit_env):
        link = await issue_link(unit_env)
        reconciler = await unit_env.get(ReconcilerService)
        audit_service = await unit_env.get(AuditService)
        link_repo = await unit_env.get(InviteLinkRepository)
        now = utcnow()
        await reconciler.on_membership_event(
            make_event(
                MemberStatus.LEFT,
                MemberStatus.MEMBER,
                invite_url=link.invite_url,
                occurred_at=now - timedelta(hours=3),
            )
        )

        outcome = await reconciler.on_membership_event(
            make_event(MemberStatus.MEMBER, MemberStatus.LEFT, occurred_at=now)
        )

        assert outcome == ReconcileOutcome.UNMATCHED_LEAVE
        assert (await link_repo.find_by_id(link.id)).status == LinkStatus.USED
        group_entries = await audit_service.history(EntityType.GROUP, GROUP_ID)
        assert [e.action for e in group_entries] == [AuditAction.MEMBER_LEFT]
        assert group_entries[0].details["note"] == "No matching invite link found"

    @pytest.mark.asyncio
    async def test_leave_on_closed_link_is_no_op(self, unit_env):
        link = await issue_link(unit_env)
        reconciler = await unit_env.get(ReconcilerService)
        gateway = await unit_env.get(TelegramGateway)
        await reconciler.on_membership_event(
            make_event(MemberStatus.MEMBER, MemberStatus.LEFT, invite_url=link.invite_url)
        )

        outcome = await reconciler.on_membership_event(
            make_event(MemberStatus.MEMBER, MemberStatus.LEFT, invite_url=link.invite_url)
        )

        assert outcome == ReconcileOutcome.NO_OP
        assert len(gateway.revoked) == 1


class TestRedelivery:
    """Tests for at-least-once delivery."""

    @pytest.mark.asyncio
    async def test_redelivered_update_changes_nothing(self, unit_env):
        """Applying the same update twice equals applying it once."""
        link = await issue_link(unit_env)
        reconciler = await unit_env.get(ReconcilerService)
        gateway = await unit_env.get(TelegramGateway)
        leave = make_event(
            MemberStatus.MEMBER,
            MemberStatus.LEFT,
            invite_url=link.invite_url,
            update_id=77,
        )

        first = await reconciler.on_membership_event(leave)
        second = await reconciler.on_membership_event(leave)

        assert first == ReconcileOutcome.LINK_CLOSED
        assert second == ReconcileOutcome.DUPLICATE
        assert len(gateway.revoked) == 1
        closed = [
            e
            for e in await history(unit_env, link.id)
            if e.action == AuditAction.AUTO_REVOKE_ON_LEAVE
        ]
        assert len(closed) == 1

    @pytest.mark.asyncio
    async def test_status_change_that_is_not_a_join_or_leave(self, unit_env):
        reconciler = await unit_env.get(ReconcilerService)

        outcome = await reconciler.on_membership_event(
            make_event(MemberStatus.MEMBER, MemberStatus.RESTRICTED)
        )

        assert outcome == ReconcileOutcome.IGNORED
