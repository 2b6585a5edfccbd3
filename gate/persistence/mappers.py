"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from gate.domain.model import (
    AdminCode,
    AuditLogEntry,
    ClientInfo,
    InviteLink,
    Reseller,
    RevenueRecord,
)
from gate.domain.value import (
    AccessCode,
    AdminCodeId,
    AuditAction,
    AuditLogId,
    EntityType,
    InviteLinkId,
    LinkStatus,
    ResellerId,
    RevenueId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_admin_code(row: Dict[str, Any]) -> AdminCode:
    """Convert database row to AdminCode domain model."""
    return AdminCode(
        id=AdminCodeId(_uuid(row["id"])),
        code=AccessCode(row["code"]),
        name=row["name"],
        is_active=row["is_active"],
        last_used_at=row.get("last_used_at"),
        created_at=row["created_at"],
    )


def admin_code_to_dict(admin_code: AdminCode) -> Dict[str, Any]:
    """Convert AdminCode domain model to database dict."""
    return admin_code.model_dump()


def row_to_reseller(row: Dict[str, Any]) -> Reseller:
    """Convert database row to Reseller domain model."""
    return Reseller(
        id=ResellerId(_uuid(row["id"])),
        code=AccessCode(row["code"]),
        name=row["name"],
        credits=row["credits"],
        group_id=row["group_id"],
        group_name=row.get("group_name"),
        is_active=row["is_active"],
        last_used_at=row.get("last_used_at"),
        created_at=row["created_at"],
    )


def reseller_to_dict(reseller: Reseller) -> Dict[str, Any]:
    """Convert Reseller domain model to database dict."""
    return reseller.model_dump()


def row_to_invite_link(row: Dict[str, Any]) -> InviteLink:
    """Convert database row to InviteLink domain model.

    Args:
        row: Database row as dict

    Returns:
        InviteLink domain model
    """
    return InviteLink(
        id=InviteLinkId(_uuid(row["id"])),
        group_id=row["group_id"],
        group_name=row.get("group_name"),
        invite_url=row["invite_url"],
        access_code=AccessCode(row["access_code"]),
        status=LinkStatus(row["status"]),
        created_by=row["created_by"],
        reseller_code=row.get("reseller_code"),
        client=ClientInfo(
            email=row.get("client_email"),
            external_id=row.get("client_id"),
            note=row.get("note"),
            receipt_ref=row.get("receipt_ref"),
        ),
        created_at=row["created_at"],
        used_at=row.get("used_at"),
        expires_at=row.get("expires_at"),
    )


def invite_link_to_dict(link: InviteLink) -> Dict[str, Any]:
    """Convert InviteLink domain model to database dict.

    Client metadata is flattened into its columns.
    """
    data = link.model_dump(exclude={"client"})
    data["status"] = link.status.value
    data.update(client_to_columns(link.client))
    return data


def client_to_columns(client: ClientInfo) -> Dict[str, Any]:
    """Flatten client metadata into invite_links columns."""
    return {
        "client_email": client.email,
        "client_id": client.external_id,
        "note": client.note,
        "receipt_ref": client.receipt_ref,
    }


def link_changes_to_values(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a transition's field changes into column values."""
    values: Dict[str, Any] = {}
    for key, value in changes.items():
        if key == "client":
            values.update(client_to_columns(value))
        elif isinstance(value, LinkStatus):
            values[key] = value.value
        else:
            values[key] = value
    return values


def row_to_audit_log(row: Dict[str, Any]) -> AuditLogEntry:
    """Convert database row to AuditLogEntry domain model."""
    return AuditLogEntry(
        id=AuditLogId(_uuid(row["id"])),
        action=AuditAction(row["action"]),
        entity_type=EntityType(row["entity_type"]),
        entity_id=row["entity_id"],
        details=row.get("details") or {},
        performed_by=row["performed_by"],
        reseller_code=row.get("reseller_code"),
        created_at=row["created_at"],
    )


def audit_log_to_dict(entry: AuditLogEntry) -> Dict[str, Any]:
    """Convert AuditLogEntry domain model to database dict."""
    return entry.model_dump(mode="json") | {"id": entry.id, "created_at": entry.created_at}


def row_to_revenue(row: Dict[str, Any]) -> RevenueRecord:
    """Convert database row to RevenueRecord domain model."""
    return RevenueRecord(
        id=RevenueId(_uuid(row["id"])),
        access_code=AccessCode(row["access_code"]),
        amount=row["amount"],
        link_id=InviteLinkId(_uuid(row["link_id"])) if row.get("link_id") else None,
        created_by=row["created_by"],
        description=row.get("description"),
        created_at=row["created_at"],
    )


def revenue_to_dict(record: RevenueRecord) -> Dict[str, Any]:
    """Convert RevenueRecord domain model to database dict."""
    return record.model_dump()
