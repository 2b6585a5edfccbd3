"""Audit log domain service."""

from typing import Any
from uuid import uuid4

import logfire

from gate.domain.model import AuditLogEntry
from gate.domain.repository import AuditLogRepository
from gate.domain.value import AuditAction, AuditLogId, EntityType


class AuditService:
    """Append-only audit sink.

    A failed write is logged and swallowed: auditing never blocks the
    operation that triggered it.
    """

    def __init__(self, audit_log_repository: AuditLogRepository) -> None:
        """Initialize audit service.

        Args:
            audit_log_repository: Audit log repository
        """
        self.audit_log_repository = audit_log_repository

    async def record(
        self,
        action: AuditAction,
        entity_type: EntityType,
        entity_id: str,
        details: dict[str, Any],
        performed_by: str,
        reseller_code: str | None = None,
    ) -> AuditLogEntry | None:
        """Append an audit entry.

        Args:
            action: Action name
            entity_type: Kind of entity the entry is about
            entity_id: Identifier of the entity
            details: Structured detail payload
            performed_by: Code or label of the actor
            reseller_code: Reseller the entity is attributed to, if any

        Returns:
            The stored entry, or None if the write failed
        """
        entry = AuditLogEntry(
            id=AuditLogId(uuid4()),
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            details=details,
            performed_by=performed_by,
            reseller_code=reseller_code,
        )
        try:
            return await self.audit_log_repository.append(entry)
        except Exception as e:
            logfire.error(
                "Audit write failed",
                action=action.value,
                entity_type=entity_type.value,
                entity_id=entity_id,
                error=str(e),
            )
            return None

    async def history(
        self, entity_type: EntityType, entity_id: str
    ) -> list[AuditLogEntry]:
        """List the entries about an entity, oldest first."""
        return await self.audit_log_repository.find_by_entity(entity_type, entity_id)

    async def has_seen_update(self, update_id: int) -> bool:
        """Check whether a provider update was already recorded."""
        return await self.audit_log_repository.exists_for_update(update_id)
