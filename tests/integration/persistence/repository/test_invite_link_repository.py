"""Integration tests for the PostgreSQL link and credit ledgers.

Run against a migrated database with ``pytest -m integration``.
"""

from uuid import uuid4

import pytest

from gate.domain.model import InviteLink, Reseller
from gate.domain.repository import InviteLinkRepository, ResellerRepository
from gate.domain.value import AccessCode, InviteLinkId, LinkStatus, ResellerId
from tests.conftest import ADMIN_CODE, GROUP_ID
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


def unique_code() -> AccessCode:
    return AccessCode(uuid4().hex[:12])


class TestPostgresInviteLinkRepository:
    """Integration tests for PostgresInviteLinkRepository."""

    @pytest.mark.asyncio
    async def test_save_and_find_by_access_code(self, integration_env):
        # Arrange
        repo = await integration_env.get(InviteLinkRepository)
        code = unique_code()
        link = InviteLink(
            id=InviteLinkId(uuid4()),
            group_id=GROUP_ID,
            invite_url=f"https://t.me/+{code.root.lower()}",
            access_code=code,
            created_by=ADMIN_CODE,
        )

        # Act
        await repo.save(link)
        found = await repo.find_by_access_code(code)

        # Assert
        assert found is not None
        assert found.id == link.id
        assert found.access_code == code
        assert found.status == LinkStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_transition_is_guarded_by_status(self, integration_env):
        repo = await integration_env.get(InviteLinkRepository)
        code = unique_code()
        link = await repo.save(
            InviteLink(
                id=InviteLinkId(uuid4()),
                group_id=GROUP_ID,
                invite_url=f"https://t.me/+{code.root.lower()}",
                access_code=code,
                created_by=ADMIN_CODE,
            )
        )

        banned = await repo.transition(
            link.id, frozenset({LinkStatus.ACTIVE}), LinkStatus.BANNED
        )
        again = await repo.transition(
            link.id, frozenset({LinkStatus.ACTIVE}), LinkStatus.REVOKED
        )

        assert banned is not None
        assert banned.status == LinkStatus.BANNED
        assert again is None


class TestPostgresResellerRepository:
    """Integration tests for the conditional credit debit."""

    @pytest.mark.asyncio
    async def test_debit_stops_at_zero(self, integration_env):
        repo = await integration_env.get(ResellerRepository)
        code = unique_code()
        await repo.save(
            Reseller(
                id=ResellerId(uuid4()),
                code=code,
                name="Integration reseller",
                credits=2,
                group_id=GROUP_ID,
            )
        )

        results = [await repo.try_debit(code, 1) for _ in range(3)]

        assert results == [1, 0, None]
        assert (await repo.find_by_code(code)).credits == 0
