"""Get link use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from gate.application.usecase.base import BaseUseCase
from gate.application.usecase.link.common import LinkView
from gate.domain.service import IdentityService, LinkService
from gate.domain.value import InviteLinkId


class GetLinkRequest(BaseModel):
    """Get link request."""

    actor_code: str
    link_id: UUID


class GetLinkUseCase(BaseUseCase[GetLinkRequest, LinkView]):
    """Use case for looking up one link within the actor's scope."""

    def __init__(
        self, identity_service: IdentityService, link_service: LinkService
    ) -> None:
        self.identity_service = identity_service
        self.link_service = link_service

    async def execute(self, request: GetLinkRequest) -> LinkView:
        """Fetch the link."""
        with logfire.span("get_link.execute", link_id=str(request.link_id)):
            actor = await self.identity_service.resolve(request.actor_code)
            link = await self.link_service.get(actor, InviteLinkId(request.link_id))
            return LinkView.from_link(link)
