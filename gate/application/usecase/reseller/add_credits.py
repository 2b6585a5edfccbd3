"""Add credits use case."""

import logfire
from pydantic import BaseModel, Field

from gate.application.usecase.base import BaseUseCase
from gate.domain.service import (
    AuditService,
    CreditService,
    IdentityService,
    parse_access_code,
)
from gate.domain.value import AuditAction, Capability, EntityType


class AddCreditsRequest(BaseModel):
    """Add credits request."""

    actor_code: str
    reseller_code: str
    amount: int = Field(gt=0)


class AddCreditsResponse(BaseModel):
    """Add credits response."""

    reseller_code: str
    credits: int


class AddCreditsUseCase(BaseUseCase[AddCreditsRequest, AddCreditsResponse]):
    """Use case for topping up a reseller's credit balance (admin only)."""

    def __init__(
        self,
        identity_service: IdentityService,
        credit_service: CreditService,
        audit_service: AuditService,
    ) -> None:
        """Initialize add credits use case.

        Args:
            identity_service: Identity domain service
            credit_service: Credit ledger
            audit_service: Audit sink
        """
        self.identity_service = identity_service
        self.credit_service = credit_service
        self.audit_service = audit_service

    async def execute(self, request: AddCreditsRequest) -> AddCreditsResponse:
        """Add credits.

        Raises:
            InsufficientScopeError: If the actor is not an admin
            NotFoundError: If the reseller does not exist
        """
        with logfire.span(
            "add_credits.execute",
            reseller_code=request.reseller_code,
            amount=request.amount,
        ):
            actor = await self.identity_service.resolve(request.actor_code)
            actor.require(Capability.MANAGE_CREDITS, "add credits")

            reseller_code = parse_access_code(request.reseller_code)
            balance = await self.credit_service.credit(reseller_code, request.amount)

            await self.audit_service.record(
                AuditAction.ADD_CREDITS,
                EntityType.RESELLER,
                reseller_code.root,
                {"amount": request.amount, "balance": balance},
                performed_by=actor.code.root,
                reseller_code=reseller_code.root,
            )
            return AddCreditsResponse(reseller_code=reseller_code.root, credits=balance)
