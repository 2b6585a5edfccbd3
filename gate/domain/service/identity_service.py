"""Identity resolution domain service."""

import logfire
from pydantic import ValidationError as PydanticValidationError

from gate.domain.error import BannedError, UnauthorizedError, ValidationError
from gate.domain.model import (
    AdminIdentity,
    EndUserIdentity,
    Identity,
    ResellerIdentity,
)
from gate.domain.model.common import utcnow
from gate.domain.repository import (
    AdminCodeRepository,
    InviteLinkRepository,
    ResellerRepository,
)
from gate.domain.value import AccessCode, LinkStatus


def parse_access_code(raw: str | None) -> AccessCode:
    """Normalize and validate a raw access code.

    Args:
        raw: Code as typed by the caller

    Returns:
        Normalized access code

    Raises:
        ValidationError: If the code is missing or malformed
    """
    if raw is None or not raw.strip():
        raise ValidationError("Access code is required")
    try:
        return AccessCode(raw)
    except PydanticValidationError:
        raise ValidationError(
            "Invalid code format. Code must be 6-20 alphanumeric characters."
        )


class IdentityService:
    """Maps access codes to identities.

    Resolution order is admin, then reseller, then invite link. A code that
    collides across namespaces resolves to the most privileged match; this
    does not rely on the store enforcing uniqueness across tables.
    """

    def __init__(
        self,
        admin_code_repository: AdminCodeRepository,
        reseller_repository: ResellerRepository,
        invite_link_repository: InviteLinkRepository,
    ) -> None:
        """Initialize identity service.

        Args:
            admin_code_repository: Admin code repository
            reseller_repository: Reseller repository
            invite_link_repository: Invite link repository
        """
        self.admin_code_repository = admin_code_repository
        self.reseller_repository = reseller_repository
        self.invite_link_repository = invite_link_repository

    async def resolve(self, raw_code: str | None) -> Identity:
        """Resolve a code to an identity.

        Args:
            raw_code: Code as supplied by the caller

        Returns:
            Admin, reseller or end-user identity

        Raises:
            ValidationError: If the code is malformed
            BannedError: If the code is a banned link or an inactive reseller
            UnauthorizedError: If the code matches nothing
        """
        code = parse_access_code(raw_code)

        with logfire.span("identity_service.resolve", code=code.redacted):
            admin = await self.admin_code_repository.find_by_code(code)
            if admin and admin.is_active:
                logfire.info("Code resolved", kind="admin", code=code.redacted)
                return AdminIdentity(code=admin.code, name=admin.name)

            reseller = await self.reseller_repository.find_by_code(code)
            if reseller:
                if not reseller.is_active:
                    logfire.warn("Inactive reseller code", code=code.root)
                    raise BannedError("Account is inactive")
                logfire.info("Code resolved", kind="reseller", code=code.root)
                return ResellerIdentity(
                    code=reseller.code,
                    name=reseller.name,
                    group_id=reseller.group_id,
                    group_name=reseller.group_name,
                    credits=reseller.credits,
                )

            link = await self.invite_link_repository.find_by_access_code(code)
            if link:
                if link.status == LinkStatus.BANNED:
                    logfire.warn("Banned link code", code=code.root)
                    raise BannedError()
                logfire.info(
                    "Code resolved",
                    kind="end_user",
                    code=code.root,
                    link_status=link.status.value,
                )
                return EndUserIdentity(
                    code=link.access_code, link_id=link.id, link_status=link.status
                )

            logfire.warn("Code not found", code=code.redacted)
            raise UnauthorizedError()

    async def verify(self, raw_code: str | None) -> Identity:
        """Resolve a code for sign-in and stamp its last use.

        Args:
            raw_code: Code as supplied by the caller

        Returns:
            The resolved identity

        Raises:
            ValidationError: If the code is malformed
            BannedError: If the code is banned or inactive
            UnauthorizedError: If the code matches nothing
        """
        identity = await self.resolve(raw_code)

        with logfire.span("identity_service.verify", kind=identity.kind.value):
            now = utcnow()
            if isinstance(identity, AdminIdentity):
                await self.admin_code_repository.touch_last_used(identity.code, now)
            elif isinstance(identity, ResellerIdentity):
                await self.reseller_repository.touch_last_used(identity.code, now)
            return identity

    async def is_privileged_code(self, code: AccessCode) -> bool:
        """Check whether a code belongs to an admin or a reseller."""
        if await self.admin_code_repository.find_by_code(code):
            return True
        return await self.reseller_repository.find_by_code(code) is not None

    async def is_code_taken(self, code: AccessCode) -> bool:
        """Check whether a code is used in any namespace."""
        if await self.is_privileged_code(code):
            return True
        return await self.invite_link_repository.find_by_access_code(code) is not None
