"""Verify code use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from gate.application.usecase.base import BaseUseCase
from gate.domain.model import AdminIdentity, EndUserIdentity, ResellerIdentity
from gate.domain.service import IdentityService
from gate.domain.value import IdentityKind, LinkStatus


class VerifyCodeRequest(BaseModel):
    """Verify code request."""

    code: str


class VerifyCodeResponse(BaseModel):
    """Verify code response.

    Carries the display data of whichever identity the code resolved to.
    """

    valid: bool = True
    kind: IdentityKind
    code: str
    name: str | None = None
    credits: int | None = None
    group_id: str | None = None
    group_name: str | None = None
    link_id: UUID | None = None
    link_status: LinkStatus | None = None


class VerifyCodeUseCase(BaseUseCase[VerifyCodeRequest, VerifyCodeResponse]):
    """Use case for signing in with an access code."""

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize verify code use case.

        Args:
            identity_service: Identity domain service
        """
        self.identity_service = identity_service

    async def execute(self, request: VerifyCodeRequest) -> VerifyCodeResponse:
        """Verify a code.

        Args:
            request: Request with the raw code

        Returns:
            Identity kind and display data

        Raises:
            ValidationError: If the code is malformed
            BannedError: If the code is banned or inactive
            UnauthorizedError: If the code is unknown
        """
        with logfire.span("verify_code.execute"):
            identity = await self.identity_service.verify(request.code)

            if isinstance(identity, AdminIdentity):
                return VerifyCodeResponse(
                    kind=identity.kind, code=identity.code.root, name=identity.name
                )
            if isinstance(identity, ResellerIdentity):
                return VerifyCodeResponse(
                    kind=identity.kind,
                    code=identity.code.root,
                    name=identity.name,
                    credits=identity.credits,
                    group_id=identity.group_id,
                    group_name=identity.group_name,
                )
            if isinstance(identity, EndUserIdentity):
                return VerifyCodeResponse(
                    kind=identity.kind,
                    code=identity.code.root,
                    link_id=identity.link_id,
                    link_status=identity.link_status,
                )
            raise TypeError(f"Unexpected identity: {type(identity).__name__}")
