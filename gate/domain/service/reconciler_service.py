"""Membership reconciliation domain service.

Maps membership events delivered by the provider onto invite links.
Delivery is at-least-once: every write is a status compare-and-swap and a
re-delivered update id is dropped, so replaying an event changes nothing.
"""

from datetime import timedelta
from enum import Enum

import logfire

from gate.config import ReconcilerSettings
from gate.domain.model import InviteLink, MembershipChange, MembershipEvent
from gate.domain.model.lifecycle import source_statuses
from gate.domain.repository import InviteLinkRepository
from gate.domain.value import AuditAction, EntityType, LinkStatus, LinkTrigger

from .audit_service import AuditService
from .link_service import WEBHOOK_ACTOR, LinkService


class ReconcileOutcome(str, Enum):
    """What reconciling one event did."""

    LINK_USED = "link_used"
    LINK_CLOSED = "link_closed"
    UNMATCHED_LEAVE = "unmatched_leave"
    NO_OP = "no_op"
    DUPLICATE = "duplicate"
    IGNORED = "ignored"


class ReconcilerService:
    """Domain service driving link status from membership events."""

    def __init__(
        self,
        invite_link_repository: InviteLinkRepository,
        link_service: LinkService,
        audit_service: AuditService,
        settings: ReconcilerSettings,
    ) -> None:
        """Initialize reconciler service.

        Args:
            invite_link_repository: Invite link repository
            link_service: Link ledger, performs the transitions
            audit_service: Audit sink
            settings: Reconciler settings (fallback window)
        """
        self.invite_link_repository = invite_link_repository
        self.link_service = link_service
        self.audit_service = audit_service
        self.settings = settings

    async def on_membership_event(self, event: MembershipEvent) -> ReconcileOutcome:
        """Reconcile one membership event.

        Args:
            event: Parsed membership change

        Returns:
            What the event did to the ledger
        """
        with logfire.span(
            "reconciler_service.on_membership_event",
            update_id=event.update_id,
            group_id=event.group_id,
            user_id=event.user.id,
            old_status=event.old_status.value,
            new_status=event.new_status.value,
            has_invite_url=event.invite_url is not None,
        ):
            if event.update_id is not None and await self.audit_service.has_seen_update(
                event.update_id
            ):
                logfire.info("Duplicate update dropped", update_id=event.update_id)
                return ReconcileOutcome.DUPLICATE

            change = event.classify()
            if change == MembershipChange.BECAME_ACTIVE:
                return await self._on_join(event)
            if change == MembershipChange.BECAME_INACTIVE:
                return await self._on_leave(event)

            logfire.info("Membership change ignored", update_id=event.update_id)
            return ReconcileOutcome.IGNORED

    async def _on_join(self, event: MembershipEvent) -> ReconcileOutcome:
        link = await self.invite_link_repository.find_by_invite_url(event.invite_url)
        if link is None:
            logfire.info("Join through unknown link", group_id=event.group_id)
            return ReconcileOutcome.NO_OP
        if link.status != LinkStatus.ACTIVE:
            logfire.info(
                "Join on non-active link",
                link_id=str(link.id),
                status=link.status.value,
            )
            return ReconcileOutcome.NO_OP

        updated = await self.link_service.record_join(link, event)
        return ReconcileOutcome.LINK_USED if updated else ReconcileOutcome.NO_OP

    async def _on_leave(self, event: MembershipEvent) -> ReconcileOutcome:
        if event.invite_url:
            link = await self.invite_link_repository.find_by_invite_url(event.invite_url)
            matched_by = "invite_url"
            if link is not None and link.status not in source_statuses(
                LinkTrigger.MEMBER_LEFT
            ):
                logfire.info(
                    "Departure on closed link",
                    link_id=str(link.id),
                    status=link.status.value,
                )
                return ReconcileOutcome.NO_OP
        else:
            link = await self.find_recent_join_in_group(event)
            matched_by = "recent_join"

        if link is None:
            await self.audit_service.record(
                AuditAction.MEMBER_LEFT,
                EntityType.GROUP,
                event.group_id,
                {
                    "group_title": event.group_title,
                    "user_id": event.user.id,
                    "username": event.user.username,
                    "first_name": event.user.first_name,
                    "new_status": event.new_status.value,
                    "update_id": event.update_id,
                    "note": "No matching invite link found",
                },
                performed_by=WEBHOOK_ACTOR,
            )
            logfire.info(
                "Departure without matching link",
                group_id=event.group_id,
                user_id=event.user.id,
            )
            return ReconcileOutcome.UNMATCHED_LEAVE

        result = await self.link_service.close_by_provider(link, event, matched_by)
        return ReconcileOutcome.LINK_CLOSED if result else ReconcileOutcome.NO_OP

    async def find_recent_join_in_group(
        self, event: MembershipEvent
    ) -> InviteLink | None:
        """Guess the link a departing member joined through.

        Picks the group's most recently used link whose used_at falls inside
        the fallback window before the event. This is an approximation: with
        several joins into one group inside the window, the latest join is
        blamed whoever actually left.

        Args:
            event: Departure event without an invite link

        Returns:
            The presumed link, or None
        """
        window = timedelta(minutes=self.settings.fallback_window_minutes)
        link = await self.invite_link_repository.find_latest_used_in_group(
            event.group_id, since=event.occurred_at - window
        )
        if link is not None:
            logfire.info(
                "Departure attributed to recent join",
                link_id=str(link.id),
                group_id=event.group_id,
                window_minutes=self.settings.fallback_window_minutes,
            )
        return link
