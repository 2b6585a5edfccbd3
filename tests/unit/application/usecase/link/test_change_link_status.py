"""Tests for the link status and lookup use cases."""

from uuid import uuid4

import pytest

from gate.adapter.telegram.client import TelegramGateway
from gate.application.usecase.link import (
    ChangeLinkStatusRequest,
    ChangeLinkStatusUseCase,
    DeleteLinkRequest,
    DeleteLinkUseCase,
    ExpireLinksRequest,
    ExpireLinksUseCase,
    GetLinkRequest,
    GetLinkUseCase,
    IssueLinkRequest,
    IssueLinkUseCase,
    LinkAction,
)
from gate.domain.error import InsufficientScopeError, NotFoundError
from gate.domain.repository import InviteLinkRepository
from gate.domain.value import InviteLinkId, LinkStatus, RemoteOutcome
from tests.conftest import ADMIN_CODE, GROUP_ID, RESELLER_CODE, seed_admin, seed_reseller
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def issue(env, actor_code: str = ADMIN_CODE, **kwargs):
    use_case = await env.get(IssueLinkUseCase)
    request = IssueLinkRequest(actor_code=actor_code, **kwargs)
    return (await use_case.execute(request)).link


class TestChangeLinkStatusUseCase:
    """Tests for ChangeLinkStatusUseCase."""

    @pytest.mark.asyncio
    async def test_ban_unban_regenerate(self, unit_env):
        """banned -> revoked -> active again with a new URL and the same code."""
        # Arrange
        await seed_admin(unit_env)
        link = await issue(unit_env, group_id=GROUP_ID, access_code="ABC12345")
        use_case = await unit_env.get(ChangeLinkStatusUseCase)

        def request(action: LinkAction) -> ChangeLinkStatusRequest:
            return ChangeLinkStatusRequest(
                actor_code=ADMIN_CODE, link_id=link.id, action=action
            )

        # Act
        banned = await use_case.execute(request(LinkAction.BAN))
        unbanned = await use_case.execute(request(LinkAction.UNBAN))
        regenerated = await use_case.execute(request(LinkAction.REGENERATE))

        # Assert
        assert banned.link.status == LinkStatus.BANNED
        assert unbanned.link.status == LinkStatus.REVOKED
        assert regenerated.link.status == LinkStatus.ACTIVE
        assert regenerated.link.access_code == "ABC12345"
        assert regenerated.link.invite_url != link.invite_url

    @pytest.mark.asyncio
    async def test_revoke_reports_remote_warning(self, unit_env):
        await seed_admin(unit_env)
        link = await issue(unit_env, group_id=GROUP_ID)
        gateway = await unit_env.get(TelegramGateway)
        gateway.revoke_outcome = RemoteOutcome.WARNING
        use_case = await unit_env.get(ChangeLinkStatusUseCase)

        response = await use_case.execute(
            ChangeLinkStatusRequest(
                actor_code=ADMIN_CODE, link_id=link.id, action=LinkAction.REVOKE
            )
        )

        assert response.local_committed is True
        assert response.remote_outcome == RemoteOutcome.WARNING
        assert response.remote_detail is not None
        assert response.link.status == LinkStatus.REVOKED

    @pytest.mark.asyncio
    async def test_reseller_cannot_ban(self, unit_env):
        await seed_reseller(unit_env)
        link = await issue(unit_env, actor_code=RESELLER_CODE)
        use_case = await unit_env.get(ChangeLinkStatusUseCase)

        with pytest.raises(InsufficientScopeError):
            await use_case.execute(
                ChangeLinkStatusRequest(
                    actor_code=RESELLER_CODE, link_id=link.id, action=LinkAction.BAN
                )
            )


class TestDeleteAndLookup:
    """Tests for DeleteLinkUseCase, GetLinkUseCase and ExpireLinksUseCase."""

    @pytest.mark.asyncio
    async def test_delete_then_get_is_not_found(self, unit_env):
        await seed_admin(unit_env)
        link = await issue(unit_env, group_id=GROUP_ID)
        delete_use_case = await unit_env.get(DeleteLinkUseCase)
        get_use_case = await unit_env.get(GetLinkUseCase)

        response = await delete_use_case.execute(
            DeleteLinkRequest(actor_code=ADMIN_CODE, link_id=link.id, permanent=True)
        )

        assert response.link.id == link.id
        assert response.remote_outcome == RemoteOutcome.OK
        with pytest.raises(NotFoundError):
            await get_use_case.execute(
                GetLinkRequest(actor_code=ADMIN_CODE, link_id=link.id)
            )

    @pytest.mark.asyncio
    async def test_get_unknown_link(self, unit_env):
        await seed_admin(unit_env)
        use_case = await unit_env.get(GetLinkUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                GetLinkRequest(actor_code=ADMIN_CODE, link_id=InviteLinkId(uuid4()))
            )

    @pytest.mark.asyncio
    async def test_expire_sweep_counts_links(self, unit_env):
        await seed_admin(unit_env)
        link = await issue(unit_env, group_id=GROUP_ID)
        link_repo = await unit_env.get(InviteLinkRepository)
        stored = await link_repo.find_by_id(link.id)
        await link_repo.save(
            stored.model_copy(update={"expires_at": stored.created_at})
        )
        use_case = await unit_env.get(ExpireLinksUseCase)

        response = await use_case.execute(ExpireLinksRequest(actor_code=ADMIN_CODE))

        assert response.expired_count == 1
        assert response.links[0].status == LinkStatus.EXPIRED
