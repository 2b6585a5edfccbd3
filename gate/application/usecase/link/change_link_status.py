"""Change link status use case (revoke, ban, unban, regenerate)."""

from enum import Enum
from uuid import UUID

import logfire
from pydantic import BaseModel

from gate.application.usecase.base import BaseUseCase
from gate.application.usecase.link.common import TransitionResponse
from gate.domain.service import IdentityService, LinkService
from gate.domain.value import InviteLinkId


class LinkAction(str, Enum):
    """Admin actions that move a link between statuses."""

    REVOKE = "revoke"
    BAN = "ban"
    UNBAN = "unban"
    REGENERATE = "regenerate"


class ChangeLinkStatusRequest(BaseModel):
    """Change link status request."""

    actor_code: str
    link_id: UUID
    action: LinkAction


class ChangeLinkStatusUseCase(
    BaseUseCase[ChangeLinkStatusRequest, TransitionResponse]
):
    """Use case for admin lifecycle actions on a single link."""

    def __init__(
        self, identity_service: IdentityService, link_service: LinkService
    ) -> None:
        """Initialize change link status use case.

        Args:
            identity_service: Identity domain service
            link_service: Link domain service
        """
        self.identity_service = identity_service
        self.link_service = link_service

    async def execute(self, request: ChangeLinkStatusRequest) -> TransitionResponse:
        """Apply the action.

        Args:
            request: Action request

        Returns:
            The link after the transition and the provider-side outcome
        """
        with logfire.span(
            "change_link_status.execute",
            link_id=str(request.link_id),
            action=request.action.value,
        ):
            actor = await self.identity_service.resolve(request.actor_code)
            link_id = InviteLinkId(request.link_id)

            if request.action == LinkAction.REVOKE:
                result = await self.link_service.revoke(actor, link_id)
            elif request.action == LinkAction.BAN:
                result = await self.link_service.ban(actor, link_id)
            elif request.action == LinkAction.UNBAN:
                result = await self.link_service.unban(actor, link_id)
            else:
                result = await self.link_service.regenerate(actor, link_id)

            return TransitionResponse.from_result(result)
