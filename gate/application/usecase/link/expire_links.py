"""Expire links use case."""

import logfire
from pydantic import BaseModel

from gate.application.usecase.base import BaseUseCase
from gate.application.usecase.link.common import LinkView
from gate.domain.service import IdentityService, LinkService


class ExpireLinksRequest(BaseModel):
    """Expire links request."""

    actor_code: str


class ExpireLinksResponse(BaseModel):
    """Expire links response."""

    expired_count: int
    links: list[LinkView]


class ExpireLinksUseCase(BaseUseCase[ExpireLinksRequest, ExpireLinksResponse]):
    """Use case for the expiry sweep."""

    def __init__(
        self, identity_service: IdentityService, link_service: LinkService
    ) -> None:
        self.identity_service = identity_service
        self.link_service = link_service

    async def execute(self, request: ExpireLinksRequest) -> ExpireLinksResponse:
        """Expire every active link past its expiry."""
        with logfire.span("expire_links.execute"):
            actor = await self.identity_service.resolve(request.actor_code)
            expired = await self.link_service.expire(actor)
            return ExpireLinksResponse(
                expired_count=len(expired),
                links=[LinkView.from_link(link) for link in expired],
            )
