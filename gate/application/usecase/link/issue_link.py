"""Issue link use case."""

from decimal import Decimal

import logfire
from pydantic import BaseModel, Field

from gate.application.usecase.base import BaseUseCase
from gate.application.usecase.link.common import TransitionResponse
from gate.domain.model import ClientInfo
from gate.domain.service import IdentityService, LinkService, parse_access_code


class IssueLinkRequest(BaseModel):
    """Issue link request."""

    actor_code: str
    group_id: str | None = None
    access_code: str | None = None
    price: Decimal | None = Field(default=None, ge=0)
    client_email: str | None = None
    client_id: str | None = None
    note: str | None = None
    receipt_ref: str | None = None


class IssueLinkUseCase(BaseUseCase[IssueLinkRequest, TransitionResponse]):
    """Use case for issuing an invite link.

    Admins issue into any configured group; resellers into their own group,
    paying one credit per link.
    """

    def __init__(
        self, identity_service: IdentityService, link_service: LinkService
    ) -> None:
        """Initialize issue link use case.

        Args:
            identity_service: Identity domain service
            link_service: Link domain service
        """
        self.identity_service = identity_service
        self.link_service = link_service

    async def execute(self, request: IssueLinkRequest) -> TransitionResponse:
        """Issue a link.

        Args:
            request: Issue request

        Returns:
            The active link and the remote outcome of any superseded URL
        """
        with logfire.span("issue_link.execute", group_id=request.group_id):
            actor = await self.identity_service.resolve(request.actor_code)
            access_code = (
                parse_access_code(request.access_code)
                if request.access_code
                else None
            )

            result = await self.link_service.issue(
                actor,
                group_id=request.group_id,
                access_code=access_code,
                price=request.price,
                client=ClientInfo(
                    email=request.client_email,
                    external_id=request.client_id,
                    note=request.note,
                    receipt_ref=request.receipt_ref,
                ),
            )
            return TransitionResponse.from_result(result)
