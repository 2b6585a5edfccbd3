"""Delete link use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from gate.application.usecase.base import BaseUseCase
from gate.application.usecase.link.common import TransitionResponse
from gate.domain.service import IdentityService, LinkService
from gate.domain.value import InviteLinkId


class DeleteLinkRequest(BaseModel):
    """Delete link request."""

    actor_code: str
    link_id: UUID
    permanent: bool = False


class DeleteLinkUseCase(BaseUseCase[DeleteLinkRequest, TransitionResponse]):
    """Use case for removing a link from the ledger.

    A permanent delete also revokes the provider link and purges the
    code's revenue records.
    """

    def __init__(
        self, identity_service: IdentityService, link_service: LinkService
    ) -> None:
        self.identity_service = identity_service
        self.link_service = link_service

    async def execute(self, request: DeleteLinkRequest) -> TransitionResponse:
        """Delete a link.

        Args:
            request: Delete request

        Returns:
            The removed link as it was, and the provider-side outcome
        """
        with logfire.span(
            "delete_link.execute",
            link_id=str(request.link_id),
            permanent=request.permanent,
        ):
            actor = await self.identity_service.resolve(request.actor_code)
            result = await self.link_service.delete(
                actor, InviteLinkId(request.link_id), permanent=request.permanent
            )
            return TransitionResponse.from_result(result)
