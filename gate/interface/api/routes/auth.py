"""Access code sign-in routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from gate.application.usecase.auth import (
    VerifyCodeRequest,
    VerifyCodeResponse,
    VerifyCodeUseCase,
)

router = APIRouter(prefix="/auth", tags=["auth"], route_class=DishkaRoute)


class VerifyCodeAPIRequest(BaseModel):
    """API request for signing in with a code."""

    code: str


@router.post("/verify", response_model=VerifyCodeResponse)
async def verify_code(
    request: VerifyCodeAPIRequest,
    verify_code_use_case: FromDishka[VerifyCodeUseCase],
) -> VerifyCodeResponse:
    """Resolve a sign-in code to an identity.

    The code travels in the body: this is the call that obtains the code
    later requests send in X-Access-Code.

    Args:
        request: Code typed by the user
        verify_code_use_case: Verify code use case from DI

    Returns:
        Identity kind and display data
    """
    return await verify_code_use_case.execute(VerifyCodeRequest(code=request.code))
