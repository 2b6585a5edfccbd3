"""Audit log entry entity."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from gate.domain.model.common import DomainModel, utcnow
from gate.domain.value import AuditAction, AuditLogId, EntityType


class AuditLogEntry(DomainModel):
    """Append-only record of a state transition or administrative action.

    Entries are never updated or deleted.
    """

    id: AuditLogId
    action: AuditAction
    entity_type: EntityType
    entity_id: str
    details: dict[str, Any] = Field(default_factory=dict)
    performed_by: str
    reseller_code: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
