"""Tests for add credits use case."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from gate.application.usecase.reseller import AddCreditsRequest, AddCreditsUseCase
from gate.domain.error import InsufficientScopeError, NotFoundError
from gate.domain.service import AuditService
from gate.domain.value import AuditAction, EntityType
from tests.conftest import ADMIN_CODE, RESELLER_CODE, seed_admin, seed_reseller
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestAddCreditsUseCase:
    """Tests for AddCreditsUseCase."""

    @pytest.mark.asyncio
    async def test_admin_adds_credits(self, unit_env):
        # Arrange
        await seed_admin(unit_env)
        await seed_reseller(unit_env, credits=2)
        use_case = await unit_env.get(AddCreditsUseCase)
        audit_service = await unit_env.get(AuditService)

        # Act
        response = await use_case.execute(
            AddCreditsRequest(actor_code=ADMIN_CODE, reseller_code="resell01", amount=10)
        )

        # Assert
        assert response.reseller_code == RESELLER_CODE
        assert response.credits == 12
        entries = await audit_service.history(EntityType.RESELLER, RESELLER_CODE)
        assert [e.action for e in entries] == [AuditAction.ADD_CREDITS]
        assert entries[0].details == {"amount": 10, "balance": 12}
        assert entries[0].performed_by == ADMIN_CODE

    @pytest.mark.asyncio
    async def test_reseller_cannot_add_credits(self, unit_env):
        await seed_reseller(unit_env, credits=0)
        use_case = await unit_env.get(AddCreditsUseCase)

        with pytest.raises(InsufficientScopeError):
            await use_case.execute(
                AddCreditsRequest(
                    actor_code=RESELLER_CODE, reseller_code=RESELLER_CODE, amount=100
                )
            )

    @pytest.mark.asyncio
    async def test_unknown_reseller(self, unit_env):
        await seed_admin(unit_env)
        use_case = await unit_env.get(AddCreditsUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                AddCreditsRequest(actor_code=ADMIN_CODE, reseller_code="NOBODY99", amount=1)
            )

    def test_amount_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            AddCreditsRequest(actor_code=ADMIN_CODE, reseller_code=RESELLER_CODE, amount=0)
