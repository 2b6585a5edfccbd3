"""Domain value objects for gate."""

from gate.domain.value.identifiers import (
    AdminCodeId,
    AuditLogId,
    InviteLinkId,
    ResellerId,
    RevenueId,
)
from gate.domain.value.types import (
    AccessCode,
    AuditAction,
    Capability,
    EntityType,
    IdentityKind,
    LinkStatus,
    LinkTrigger,
    MemberStatus,
    RemoteOutcome,
)

__all__ = [
    # Identifiers
    "InviteLinkId",
    "AdminCodeId",
    "ResellerId",
    "AuditLogId",
    "RevenueId",
    # Types
    "AccessCode",
    "AuditAction",
    "Capability",
    "EntityType",
    "IdentityKind",
    "LinkStatus",
    "LinkTrigger",
    "MemberStatus",
    "RemoteOutcome",
]
