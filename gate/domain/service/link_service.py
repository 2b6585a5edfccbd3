"""Link ledger domain service.

Owns every status change of an invite link. Transitions are resolved
against the lifecycle table and written as a compare-and-swap on the
current status. Provider calls are best effort: a failed revoke is
reported on the result and in the audit entry, and the local transition
commits regardless.
"""

import secrets
from datetime import timedelta
from decimal import Decimal
from typing import Any
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from gate.config import AccessCodeSettings, TelegramSettings
from gate.domain.error import (
    ConflictError,
    GatewayUnavailableError,
    InsufficientScopeError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from gate.domain.model import (
    AdminIdentity,
    ClientInfo,
    EndUserIdentity,
    Identity,
    InviteLink,
    MembershipEvent,
    ResellerIdentity,
    RevenueRecord,
    TransitionResult,
)
from gate.domain.model.common import utcnow
from gate.domain.model.lifecycle import next_status, source_statuses
from gate.domain.repository import InviteLinkRepository, RevenueRepository
from gate.domain.value import (
    AccessCode,
    AuditAction,
    Capability,
    EntityType,
    InviteLinkId,
    LinkStatus,
    LinkTrigger,
    RevenueId,
)

from .audit_service import AuditService
from .credit_service import CreditService
from .gateway import GatewayError, GatewayLink, GatewayRevokeResult, MessagingGateway
from .identity_service import IdentityService

WEBHOOK_ACTOR = "telegram-webhook"


class LinkService:
    """Domain service for the invite link lifecycle."""

    def __init__(
        self,
        invite_link_repository: InviteLinkRepository,
        revenue_repository: RevenueRepository,
        gateway: MessagingGateway,
        identity_service: IdentityService,
        credit_service: CreditService,
        audit_service: AuditService,
        telegram_settings: TelegramSettings,
        access_code_settings: AccessCodeSettings,
    ) -> None:
        """Initialize link service.

        Args:
            invite_link_repository: Invite link repository
            revenue_repository: Revenue repository
            gateway: Messaging provider gateway
            identity_service: Identity service, for code collision checks
            credit_service: Credit ledger
            audit_service: Audit sink
            telegram_settings: Link limits, expiry and configured groups
            access_code_settings: Access code generation settings
        """
        self.invite_link_repository = invite_link_repository
        self.revenue_repository = revenue_repository
        self.gateway = gateway
        self.identity_service = identity_service
        self.credit_service = credit_service
        self.audit_service = audit_service
        self.telegram_settings = telegram_settings
        self.access_code_settings = access_code_settings

    # ------------------------------------------------------------------
    # Issuance
    # ------------------------------------------------------------------

    async def issue(
        self,
        actor: Identity,
        group_id: str | None = None,
        access_code: AccessCode | None = None,
        price: Decimal | None = None,
        client: ClientInfo | None = None,
    ) -> TransitionResult:
        """Issue a link, or supersede the link already holding the code.

        Resellers pay one credit per issuance and may only issue into their
        assigned group. The credit is taken before the provider is called,
        so an issuance without credit never reaches the provider.

        Args:
            actor: Issuing identity
            group_id: Target group (defaults to the reseller's group)
            access_code: Explicit code; generated when omitted
            price: Optional price, recorded as revenue
            client: Optional client metadata

        Returns:
            The active link and the outcome of revoking a superseded URL

        Raises:
            InsufficientScopeError: If the actor may not issue into the group
            ValidationError: If the group is missing or unknown
            ConflictError: If the code is privileged, banned or cannot be generated
            InsufficientCreditError: If a reseller has no credit left
            GatewayUnavailableError: If the provider could not create the link
        """
        group_id, group_name = self._resolve_group(actor, group_id)
        client = client or ClientInfo()

        with logfire.span(
            "link_service.issue",
            actor_kind=actor.kind.value,
            group_id=group_id,
            explicit_code=access_code is not None,
        ):
            existing = None
            if access_code is not None:
                existing = await self._check_explicit_code(actor, access_code)
            else:
                access_code = await self._generate_code()

            reseller_code = (
                actor.code.root if isinstance(actor, ResellerIdentity) else None
            )
            if isinstance(actor, ResellerIdentity):
                await self.credit_service.try_debit(actor.code)

            try:
                created = await self._create_remote(access_code, group_id, group_name)
            except GatewayUnavailableError:
                if isinstance(actor, ResellerIdentity):
                    await self.credit_service.credit(actor.code, 1)
                raise

            if existing is not None:
                result = await self._supersede(
                    actor, existing, created, group_id, group_name, client
                )
            else:
                link = InviteLink(
                    id=InviteLinkId(uuid4()),
                    group_id=group_id,
                    group_name=group_name,
                    invite_url=created.url,
                    access_code=access_code,
                    status=LinkStatus.ACTIVE,
                    created_by=actor.code.root,
                    reseller_code=reseller_code,
                    client=client,
                    expires_at=created.expires_at,
                )
                try:
                    link = await self.invite_link_repository.save(link)
                except IntegrityError:
                    # Another issuance claimed the code after the check
                    await self.gateway.revoke_invite_link(group_id, created.url)
                    if isinstance(actor, ResellerIdentity):
                        await self.credit_service.credit(actor.code, 1)
                    logfire.warn(
                        "Access code claimed concurrently",
                        access_code=access_code.root,
                        group_id=group_id,
                    )
                    raise ConflictError(
                        f"Access code {access_code.root} is already in use"
                    )
                await self.audit_service.record(
                    AuditAction.CREATE_LINK,
                    EntityType.INVITE_LINK,
                    str(link.id),
                    {
                        "access_code": link.access_code.root,
                        "group_id": group_id,
                        "group_name": group_name,
                        "price": str(price) if price is not None else None,
                    },
                    performed_by=actor.code.root,
                    reseller_code=reseller_code,
                )
                result = TransitionResult(link=link)

            if price is not None and price > 0:
                await self.revenue_repository.save(
                    RevenueRecord(
                        id=RevenueId(uuid4()),
                        access_code=result.link.access_code,
                        amount=price,
                        link_id=result.link.id,
                        created_by=actor.code.root,
                        description=f"Link {result.link.access_code.root}",
                    )
                )

            logfire.info(
                "Link issued",
                link_id=str(result.link.id),
                access_code=result.link.access_code.root,
                group_id=group_id,
                superseded=existing is not None,
            )
            return result

    def _resolve_group(
        self, actor: Identity, group_id: str | None
    ) -> tuple[str, str | None]:
        """Apply the actor's issuance scope to the requested group."""
        if isinstance(actor, ResellerIdentity):
            actor.require(Capability.ISSUE_OWN_GROUP, "issue links")
            if group_id and group_id != actor.group_id:
                raise InsufficientScopeError("issue links outside the assigned group")
            return actor.group_id, actor.group_name

        if isinstance(actor, AdminIdentity):
            actor.require(Capability.ISSUE_ANY_GROUP, "issue links")
            if not group_id:
                raise ValidationError("Group is required")
            if not self.telegram_settings.groups:
                return group_id, None
            group = self.telegram_settings.find_group(group_id)
            if group is None:
                raise ValidationError(f"Unknown group: {group_id}")
            return group.id, group.name

        raise InsufficientScopeError("issue links")

    async def _check_explicit_code(
        self, actor: Identity, access_code: AccessCode
    ) -> InviteLink | None:
        """Validate an explicit code and return the link it supersedes, if any."""
        if await self.identity_service.is_privileged_code(access_code):
            raise ConflictError("Access code is reserved")

        existing = await self.invite_link_repository.find_by_access_code(access_code)
        if existing is None:
            return None
        if existing.status == LinkStatus.BANNED:
            raise ConflictError(f"Access code {access_code.root} is banned")
        if (
            isinstance(actor, ResellerIdentity)
            and existing.reseller_code != actor.code.root
        ):
            raise ConflictError(f"Access code {access_code.root} is already in use")
        return existing

    async def _generate_code(self) -> AccessCode:
        """Generate an unused access code."""
        settings = self.access_code_settings
        for _ in range(settings.max_attempts):
            candidate = AccessCode(
                "".join(
                    secrets.choice(settings.alphabet) for _ in range(settings.length)
                )
            )
            if not await self.identity_service.is_code_taken(candidate):
                return candidate
            logfire.warn("Generated access code collided", code=candidate.redacted)
        raise ConflictError("Could not generate a unique access code")

    async def _create_remote(
        self, access_code: AccessCode, group_id: str, group_name: str | None
    ) -> GatewayLink:
        """Create a provider link, translating failures for the caller."""
        expires_at = None
        if self.telegram_settings.link_ttl_hours:
            expires_at = utcnow() + timedelta(hours=self.telegram_settings.link_ttl_hours)

        try:
            return await self.gateway.create_invite_link(
                group_id,
                member_limit=self.telegram_settings.member_limit,
                label=f"[{access_code.root}] {group_name or group_id}",
                expires_at=expires_at,
            )
        except GatewayError as e:
            logfire.error(
                "Provider link creation failed",
                group_id=group_id,
                access_code=access_code.root,
                outcome=e.outcome.value,
                error=str(e),
            )
            raise GatewayUnavailableError(f"Could not create invite link: {e}")

    async def _supersede(
        self,
        actor: Identity,
        existing: InviteLink,
        created: GatewayLink,
        group_id: str,
        group_name: str | None,
        client: ClientInfo,
    ) -> TransitionResult:
        """Point an existing code at a fresh provider link."""
        updated = await self.invite_link_repository.transition(
            existing.id,
            source_statuses(LinkTrigger.SUPERSEDE),
            next_status(existing.status, LinkTrigger.SUPERSEDE),
            {
                "group_id": group_id,
                "group_name": group_name,
                "invite_url": created.url,
                "expires_at": created.expires_at,
                "used_at": None,
                "client": client,
            },
        )
        if updated is None:
            await self.gateway.revoke_invite_link(group_id, created.url)
            if isinstance(actor, ResellerIdentity):
                await self.credit_service.credit(actor.code, 1)
            raise ConflictError(
                f"Access code {existing.access_code.root} changed during reissue"
            )

        revoked = await self._revoke_remote(existing)
        await self.audit_service.record(
            AuditAction.SUPERSEDE_LINK,
            EntityType.INVITE_LINK,
            str(updated.id),
            {
                "access_code": updated.access_code.root,
                "previous_status": existing.status.value,
                "group_id": group_id,
                **self._remote_details(revoked),
            },
            performed_by=actor.code.root,
            reseller_code=updated.reseller_code,
        )
        return self._result(updated, revoked)

    # ------------------------------------------------------------------
    # Admin transitions
    # ------------------------------------------------------------------

    async def revoke(self, actor: Identity, link_id: InviteLinkId) -> TransitionResult:
        """Revoke a link without banning its code.

        Raises:
            InsufficientScopeError: If the actor is not an admin
            NotFoundError: If the link does not exist
            InvalidTransitionError: If the link is not active or used
        """
        actor.require(Capability.MANAGE_LINKS, "revoke links")

        with logfire.span("link_service.revoke", link_id=str(link_id)):
            link = await self._get_or_raise(link_id)
            updated = await self._transition(link, LinkTrigger.REVOKE)
            revoked = await self._revoke_remote(link)
            await self._audit_link(
                AuditAction.REVOKE_TELEGRAM, updated, actor, self._remote_details(revoked)
            )
            logfire.info(
                "Link revoked",
                link_id=str(link_id),
                remote_outcome=revoked.outcome.value,
            )
            return self._result(updated, revoked)

    async def ban(self, actor: Identity, link_id: InviteLinkId) -> TransitionResult:
        """Ban a link's code and purge its revenue records.

        Raises:
            InsufficientScopeError: If the actor is not an admin
            NotFoundError: If the link does not exist
            InvalidTransitionError: If the link is not active or used
        """
        actor.require(Capability.MANAGE_LINKS, "ban links")

        with logfire.span("link_service.ban", link_id=str(link_id)):
            link = await self._get_or_raise(link_id)
            updated = await self._transition(link, LinkTrigger.BAN)
            revoked = await self._revoke_remote(link)
            purged = await self.revenue_repository.delete_by_access_code(
                link.access_code
            )
            await self._audit_link(
                AuditAction.BAN_LINK,
                updated,
                actor,
                {"revenue_purged": purged, **self._remote_details(revoked)},
            )
            logfire.info(
                "Link banned",
                link_id=str(link_id),
                revenue_purged=purged,
                remote_outcome=revoked.outcome.value,
            )
            return self._result(updated, revoked)

    async def unban(self, actor: Identity, link_id: InviteLinkId) -> TransitionResult:
        """Lift a ban. The link lands on revoked and must be regenerated.

        Raises:
            InsufficientScopeError: If the actor is not an admin
            NotFoundError: If the link does not exist
            InvalidTransitionError: If the link is not banned
        """
        actor.require(Capability.MANAGE_LINKS, "unban links")

        with logfire.span("link_service.unban", link_id=str(link_id)):
            link = await self._get_or_raise(link_id)
            updated = await self._transition(link, LinkTrigger.UNBAN)
            await self._audit_link(AuditAction.UNBAN_LINK, updated, actor, {})
            logfire.info("Link unbanned", link_id=str(link_id))
            return TransitionResult(link=updated)

    async def regenerate(
        self, actor: Identity, link_id: InviteLinkId
    ) -> TransitionResult:
        """Give a closed link a fresh provider URL under the same code.

        The new URL is created first: without it there is nothing to
        activate. The old URL is then revoked best effort.

        Raises:
            InsufficientScopeError: If the actor is not an admin
            NotFoundError: If the link does not exist
            InvalidTransitionError: If the link is active or used
            GatewayUnavailableError: If the provider could not create the link
        """
        actor.require(Capability.MANAGE_LINKS, "regenerate links")

        with logfire.span("link_service.regenerate", link_id=str(link_id)):
            link = await self._get_or_raise(link_id)
            target = next_status(link.status, LinkTrigger.REGENERATE)

            created = await self._create_remote(
                link.access_code, link.group_id, link.group_name
            )
            updated = await self.invite_link_repository.transition(
                link.id,
                source_statuses(LinkTrigger.REGENERATE),
                target,
                {
                    "invite_url": created.url,
                    "expires_at": created.expires_at,
                    "used_at": None,
                },
            )
            if updated is None:
                await self.gateway.revoke_invite_link(link.group_id, created.url)
                raise await self._lost_race(link.id, LinkTrigger.REGENERATE)

            revoked = await self._revoke_remote(link)
            await self._audit_link(
                AuditAction.REGENERATE_LINK,
                updated,
                actor,
                {
                    "previous_status": link.status.value,
                    "previous_invite_url": link.invite_url,
                    **self._remote_details(revoked),
                },
            )
            logfire.info(
                "Link regenerated",
                link_id=str(link_id),
                previous_status=link.status.value,
                remote_outcome=revoked.outcome.value,
            )
            return self._result(updated, revoked)

    async def expire(self, actor: Identity) -> list[InviteLink]:
        """Move every active link past its expiry to expired.

        Returns:
            The links that were expired by this call

        Raises:
            InsufficientScopeError: If the actor is not an admin
        """
        actor.require(Capability.MANAGE_LINKS, "expire links")

        with logfire.span("link_service.expire"):
            now = utcnow()
            candidates = await self.invite_link_repository.find_expired_active(now)
            expired = []
            for link in candidates:
                updated = await self.invite_link_repository.transition(
                    link.id,
                    source_statuses(LinkTrigger.EXPIRE),
                    LinkStatus.EXPIRED,
                )
                if updated is None:
                    continue
                await self._audit_link(
                    AuditAction.EXPIRE_LINK,
                    updated,
                    actor,
                    {"expires_at": link.expires_at.isoformat() if link.expires_at else None},
                )
                expired.append(updated)

            logfire.info(
                "Expiry sweep finished", candidates=len(candidates), expired=len(expired)
            )
            return expired

    async def delete(
        self, actor: Identity, link_id: InviteLinkId, permanent: bool = False
    ) -> TransitionResult:
        """Remove a link record.

        A plain delete is ledger bookkeeping only. A permanent delete also
        revokes the provider URL and purges the code's revenue records.

        Raises:
            InsufficientScopeError: If the actor is not an admin
            NotFoundError: If the link does not exist
        """
        actor.require(Capability.MANAGE_LINKS, "delete links")

        with logfire.span(
            "link_service.delete", link_id=str(link_id), permanent=permanent
        ):
            link = await self._get_or_raise(link_id)
            revoked = None
            details: dict[str, Any] = {"status": link.status.value}

            if permanent:
                revoked = await self._revoke_remote(link)
                purged = await self.revenue_repository.delete_by_access_code(
                    link.access_code
                )
                details.update(revenue_purged=purged, **self._remote_details(revoked))

            if not await self.invite_link_repository.delete(link.id):
                raise NotFoundError("Invite link", str(link_id))

            await self._audit_link(
                AuditAction.PERMANENT_DELETE_LINK if permanent else AuditAction.DELETE_LINK,
                link,
                actor,
                details,
            )
            logfire.info("Link deleted", link_id=str(link_id), permanent=permanent)
            return self._result(link, revoked)

    async def get(self, actor: Identity, link_id: InviteLinkId) -> InviteLink:
        """Fetch a link the actor is allowed to see.

        Admins see every link, resellers the links they issued and end users
        their own. Links outside the actor's scope are reported as missing.

        Raises:
            NotFoundError: If the link does not exist or is out of scope
        """
        with logfire.span("link_service.get", link_id=str(link_id)):
            link = await self._get_or_raise(link_id)

            if isinstance(actor, AdminIdentity) and actor.can(Capability.VIEW_ANY_LINK):
                return link
            if (
                isinstance(actor, ResellerIdentity)
                and actor.can(Capability.VIEW_ISSUED_LINKS)
                and link.reseller_code == actor.code.root
            ):
                return link
            if (
                isinstance(actor, EndUserIdentity)
                and actor.can(Capability.VIEW_OWN_LINK)
                and link.id == actor.link_id
            ):
                return link

            logfire.warn(
                "Link outside actor scope",
                link_id=str(link_id),
                actor_kind=actor.kind.value,
            )
            raise NotFoundError("Invite link", str(link_id))

    # ------------------------------------------------------------------
    # Provider-driven transitions
    # ------------------------------------------------------------------

    async def record_join(
        self, link: InviteLink, event: MembershipEvent
    ) -> InviteLink | None:
        """Mark an active link used after its member joined.

        Returns:
            The updated link, or None if the link was no longer active
        """
        with logfire.span("link_service.record_join", link_id=str(link.id)):
            updated = await self.invite_link_repository.transition(
                link.id,
                source_statuses(LinkTrigger.MEMBER_JOINED),
                LinkStatus.USED,
                {"used_at": event.occurred_at},
            )
            if updated is None:
                logfire.info("Join already recorded", link_id=str(link.id))
                return None

            await self.audit_service.record(
                AuditAction.MEMBER_JOINED,
                EntityType.INVITE_LINK,
                str(updated.id),
                {
                    "access_code": updated.access_code.root,
                    "group_id": event.group_id,
                    "group_name": updated.group_name or event.group_title,
                    **self._member_details(event),
                },
                performed_by=WEBHOOK_ACTOR,
                reseller_code=updated.reseller_code,
            )
            logfire.info(
                "Member joined",
                link_id=str(updated.id),
                access_code=updated.access_code.root,
                user_id=event.user.id,
            )
            return updated

    async def close_by_provider(
        self, link: InviteLink, event: MembershipEvent, matched_by: str
    ) -> TransitionResult | None:
        """Close a link after its member left and revoke it best effort.

        Returns:
            The transition result, or None if the link was already closed
        """
        with logfire.span(
            "link_service.close_by_provider", link_id=str(link.id), matched_by=matched_by
        ):
            updated = await self.invite_link_repository.transition(
                link.id,
                source_statuses(LinkTrigger.MEMBER_LEFT),
                LinkStatus.CLOSED_BY_PROVIDER,
            )
            if updated is None:
                logfire.info("Departure already recorded", link_id=str(link.id))
                return None

            revoked = await self._revoke_remote(link)
            await self.audit_service.record(
                AuditAction.AUTO_REVOKE_ON_LEAVE,
                EntityType.INVITE_LINK,
                str(updated.id),
                {
                    "access_code": updated.access_code.root,
                    "group_id": event.group_id,
                    "reason": "User left group",
                    "matched_by": matched_by,
                    "telegram_revoked": revoked.ok,
                    **self._member_details(event),
                    **self._remote_details(revoked),
                },
                performed_by=WEBHOOK_ACTOR,
                reseller_code=updated.reseller_code,
            )
            logfire.info(
                "Link closed by provider",
                link_id=str(updated.id),
                access_code=updated.access_code.root,
                remote_outcome=revoked.outcome.value,
            )
            return self._result(updated, revoked)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get_or_raise(self, link_id: InviteLinkId) -> InviteLink:
        link = await self.invite_link_repository.find_by_id(link_id)
        if link is None:
            raise NotFoundError("Invite link", str(link_id))
        return link

    async def _transition(
        self,
        link: InviteLink,
        trigger: LinkTrigger,
        changes: dict[str, Any] | None = None,
    ) -> InviteLink:
        """Apply a trigger as a compare-and-swap on the link's status."""
        target = next_status(link.status, trigger)
        updated = await self.invite_link_repository.transition(
            link.id, source_statuses(trigger), target, changes
        )
        if updated is None:
            raise await self._lost_race(link.id, trigger)
        return updated

    async def _lost_race(
        self, link_id: InviteLinkId, trigger: LinkTrigger
    ) -> Exception:
        """Build the error for a transition whose status check failed."""
        current = await self.invite_link_repository.find_by_id(link_id)
        if current is None:
            return NotFoundError("Invite link", str(link_id))
        logfire.warn(
            "Concurrent link transition",
            link_id=str(link_id),
            trigger=trigger.value,
            status=current.status.value,
        )
        return InvalidTransitionError(current.status.value, trigger.value)

    async def _revoke_remote(self, link: InviteLink) -> GatewayRevokeResult:
        result = await self.gateway.revoke_invite_link(link.group_id, link.invite_url)
        if not result.ok:
            logfire.warn(
                "Provider revoke did not succeed",
                link_id=str(link.id),
                outcome=result.outcome.value,
                detail=result.detail,
            )
        return result

    async def _audit_link(
        self,
        action: AuditAction,
        link: InviteLink,
        actor: Identity,
        details: dict[str, Any],
    ) -> None:
        await self.audit_service.record(
            action,
            EntityType.INVITE_LINK,
            str(link.id),
            {"access_code": link.access_code.root, **details},
            performed_by=actor.code.root,
            reseller_code=link.reseller_code,
        )

    @staticmethod
    def _remote_details(revoked: GatewayRevokeResult) -> dict[str, Any]:
        return {
            "remote_outcome": revoked.outcome.value,
            "remote_detail": revoked.detail,
        }

    @staticmethod
    def _member_details(event: MembershipEvent) -> dict[str, Any]:
        return {
            "user_id": event.user.id,
            "username": event.user.username,
            "first_name": event.user.first_name,
            "update_id": event.update_id,
        }

    @staticmethod
    def _result(
        link: InviteLink, revoked: GatewayRevokeResult | None
    ) -> TransitionResult:
        if revoked is None:
            return TransitionResult(link=link)
        return TransitionResult(
            link=link,
            local_committed=True,
            remote_outcome=revoked.outcome,
            remote_detail=revoked.detail,
        )
