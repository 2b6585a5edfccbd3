"""Unit tests for AuditService."""

import pytest

from gate.domain.repository import AuditLogRepository
from gate.domain.service import AuditService
from gate.domain.value import AuditAction, EntityType
from gate.persistence.repository.inmemory import (
    InMemoryAuditLogRepository,
    InMemoryStore,
)


class FailingAuditLogRepository(AuditLogRepository):
    """Audit repository whose writes always fail."""

    async def append(self, entry):
        raise RuntimeError("disk full")

    async def find_by_entity(self, entity_type, entity_id):
        return []

    async def exists_for_update(self, update_id):
        return False


@pytest.mark.asyncio
async def test_failed_write_does_not_raise():
    """Auditing never blocks the operation that triggered it."""
    audit_service = AuditService(audit_log_repository=FailingAuditLogRepository())

    entry = await audit_service.record(
        AuditAction.REVOKE_TELEGRAM,
        EntityType.INVITE_LINK,
        "link-1",
        {"access_code": "ABC12345"},
        performed_by="ADMIN001",
    )

    assert entry is None


@pytest.mark.asyncio
async def test_update_ids_are_remembered():
    audit_service = AuditService(
        audit_log_repository=InMemoryAuditLogRepository(InMemoryStore())
    )
    await audit_service.record(
        AuditAction.MEMBER_JOINED,
        EntityType.INVITE_LINK,
        "link-1",
        {"update_id": 1001},
        performed_by="telegram-webhook",
    )

    assert await audit_service.has_seen_update(1001) is True
    assert await audit_service.has_seen_update(1002) is False
    history = await audit_service.history(EntityType.INVITE_LINK, "link-1")
    assert [entry.action for entry in history] == [AuditAction.MEMBER_JOINED]
