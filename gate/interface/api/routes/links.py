"""Invite link routes."""

from decimal import Decimal
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from gate.application.usecase.link import (
    ChangeLinkStatusRequest,
    ChangeLinkStatusUseCase,
    DeleteLinkRequest,
    DeleteLinkUseCase,
    ExpireLinksRequest,
    ExpireLinksResponse,
    ExpireLinksUseCase,
    GetLinkRequest,
    GetLinkUseCase,
    IssueLinkRequest,
    IssueLinkUseCase,
    LinkAction,
    LinkView,
    TransitionResponse,
)
from gate.interface.api.dependencies import access_code_header

router = APIRouter(prefix="/links", tags=["links"], route_class=DishkaRoute)


class IssueLinkAPIRequest(BaseModel):
    """API request for issuing a link."""

    group_id: str | None = None
    access_code: str | None = None
    price: Decimal | None = Field(default=None, ge=0)
    client_email: str | None = None
    client_id: str | None = None
    note: str | None = None
    receipt_ref: str | None = None


@router.post(
    "", response_model=TransitionResponse, status_code=status.HTTP_201_CREATED
)
async def issue_link(
    request: IssueLinkAPIRequest,
    issue_link_use_case: FromDishka[IssueLinkUseCase],
    access_code: str = Depends(access_code_header),
) -> TransitionResponse:
    """Issue an invite link, or reissue the link holding an explicit code.

    Args:
        request: Target group, optional code, price and client metadata
        issue_link_use_case: Issue link use case from DI
        access_code: Actor code from the X-Access-Code header

    Returns:
        The active link and the outcome of revoking any superseded URL
    """
    return await issue_link_use_case.execute(
        IssueLinkRequest(actor_code=access_code, **request.model_dump())
    )


# Registered before the /{link_id} routes so "expire" is not read as an id
@router.post("/expire", response_model=ExpireLinksResponse)
async def expire_links(
    expire_links_use_case: FromDishka[ExpireLinksUseCase],
    access_code: str = Depends(access_code_header),
) -> ExpireLinksResponse:
    """Expire every active link past its expiry."""
    return await expire_links_use_case.execute(
        ExpireLinksRequest(actor_code=access_code)
    )


@router.get("/{link_id}", response_model=LinkView)
async def get_link(
    link_id: UUID,
    get_link_use_case: FromDishka[GetLinkUseCase],
    access_code: str = Depends(access_code_header),
) -> LinkView:
    """Fetch a link within the caller's scope."""
    return await get_link_use_case.execute(
        GetLinkRequest(actor_code=access_code, link_id=link_id)
    )


async def _change_status(
    use_case: ChangeLinkStatusUseCase,
    access_code: str,
    link_id: UUID,
    action: LinkAction,
) -> TransitionResponse:
    return await use_case.execute(
        ChangeLinkStatusRequest(actor_code=access_code, link_id=link_id, action=action)
    )


@router.post("/{link_id}/revoke", response_model=TransitionResponse)
async def revoke_link(
    link_id: UUID,
    change_link_status_use_case: FromDishka[ChangeLinkStatusUseCase],
    access_code: str = Depends(access_code_header),
) -> TransitionResponse:
    """Revoke a link without banning its code."""
    return await _change_status(
        change_link_status_use_case, access_code, link_id, LinkAction.REVOKE
    )


@router.post("/{link_id}/ban", response_model=TransitionResponse)
async def ban_link(
    link_id: UUID,
    change_link_status_use_case: FromDishka[ChangeLinkStatusUseCase],
    access_code: str = Depends(access_code_header),
) -> TransitionResponse:
    """Ban a link's code."""
    return await _change_status(
        change_link_status_use_case, access_code, link_id, LinkAction.BAN
    )


@router.post("/{link_id}/unban", response_model=TransitionResponse)
async def unban_link(
    link_id: UUID,
    change_link_status_use_case: FromDishka[ChangeLinkStatusUseCase],
    access_code: str = Depends(access_code_header),
) -> TransitionResponse:
    """Lift a ban."""
    return await _change_status(
        change_link_status_use_case, access_code, link_id, LinkAction.UNBAN
    )


@router.post("/{link_id}/regenerate", response_model=TransitionResponse)
async def regenerate_link(
    link_id: UUID,
    change_link_status_use_case: FromDishka[ChangeLinkStatusUseCase],
    access_code: str = Depends(access_code_header),
) -> TransitionResponse:
    """Give a closed link a fresh URL under the same code."""
    return await _change_status(
        change_link_status_use_case, access_code, link_id, LinkAction.REGENERATE
    )


@router.delete("/{link_id}", response_model=TransitionResponse)
async def delete_link(
    link_id: UUID,
    delete_link_use_case: FromDishka[DeleteLinkUseCase],
    access_code: str = Depends(access_code_header),
    permanent: bool = Query(default=False),
) -> TransitionResponse:
    """Delete a link record.

    Args:
        link_id: Link to delete
        delete_link_use_case: Delete link use case from DI
        access_code: Actor code from the X-Access-Code header
        permanent: Also revoke the Telegram link and purge revenue

    Returns:
        The deleted link and the provider-side outcome
    """
    return await delete_link_use_case.execute(
        DeleteLinkRequest(actor_code=access_code, link_id=link_id, permanent=permanent)
    )
