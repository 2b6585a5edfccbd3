"""Reseller routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from gate.application.usecase.reseller import (
    AddCreditsRequest,
    AddCreditsResponse,
    AddCreditsUseCase,
)
from gate.interface.api.dependencies import access_code_header

router = APIRouter(prefix="/resellers", tags=["resellers"], route_class=DishkaRoute)


class AddCreditsAPIRequest(BaseModel):
    """API request for adding credits."""

    amount: int = Field(gt=0)


@router.post("/{reseller_code}/credits", response_model=AddCreditsResponse)
async def add_credits(
    reseller_code: str,
    request: AddCreditsAPIRequest,
    add_credits_use_case: FromDishka[AddCreditsUseCase],
    access_code: str = Depends(access_code_header),
) -> AddCreditsResponse:
    """Top up a reseller's credit balance.

    Args:
        reseller_code: Reseller to credit
        request: Amount to add
        add_credits_use_case: Add credits use case from DI
        access_code: Admin code from the X-Access-Code header

    Returns:
        The reseller's new balance
    """
    return await add_credits_use_case.execute(
        AddCreditsRequest(
            actor_code=access_code,
            reseller_code=reseller_code,
            amount=request.amount,
        )
    )
