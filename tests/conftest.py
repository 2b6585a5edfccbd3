"""Test configuration and fixtures."""

import os
from datetime import datetime, timezone
from uuid import uuid4

import logfire

# Settings are read from the environment; keep local .env values from
# changing which groups, secrets or windows the tests see
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("TELEGRAM__GROUPS", "[]")
os.environ.setdefault("WEBHOOK__SECRET_TOKEN", "")

logfire.configure(send_to_logfire=False, console=False)

from gate.domain.model import (  # noqa: E402
    AdminCode,
    MembershipEvent,
    Reseller,
    TelegramUser,
)
from gate.domain.repository import (  # noqa: E402
    AdminCodeRepository,
    ResellerRepository,
)
from gate.domain.value import (  # noqa: E402
    AccessCode,
    AdminCodeId,
    MemberStatus,
    ResellerId,
)

ADMIN_CODE = "ADMIN001"
RESELLER_CODE = "RESELL01"
GROUP_ID = "-1001234567890"
GROUP_NAME = "VIP Signals"


async def seed_admin(container, code: str = ADMIN_CODE) -> AdminCode:
    """Store an active admin code."""
    repo = await container.get(AdminCodeRepository)
    return await repo.save(
        AdminCode(id=AdminCodeId(uuid4()), code=AccessCode(code), name="Owner")
    )


async def seed_reseller(
    container,
    code: str = RESELLER_CODE,
    credits: int = 5,
    group_id: str = GROUP_ID,
    is_active: bool = True,
) -> Reseller:
    """Store a reseller assigned to a group."""
    repo = await container.get(ResellerRepository)
    return await repo.save(
        Reseller(
            id=ResellerId(uuid4()),
            code=AccessCode(code),
            name=f"Reseller {code}",
            credits=credits,
            group_id=group_id,
            group_name=GROUP_NAME,
            is_active=is_active,
        )
    )


def make_event(
    old_status: MemberStatus,
    new_status: MemberStatus,
    invite_url: str | None = None,
    update_id: int | None = None,
    group_id: str = GROUP_ID,
    user_id: int = 4242,
    occurred_at: datetime | None = None,
) -> MembershipEvent:
    """Build a membership event."""
    return MembershipEvent(
        update_id=update_id,
        group_id=group_id,
        group_title=GROUP_NAME,
        user=TelegramUser(id=user_id, username="alice", first_name="Alice"),
        old_status=old_status,
        new_status=new_status,
        invite_url=invite_url,
        occurred_at=occurred_at or datetime.now(timezone.utc),
    )
