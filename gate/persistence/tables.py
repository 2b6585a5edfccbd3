"""SQLAlchemy table definitions for gate.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ADMIN CODES TABLE
# ============================================================================
admin_codes_table = Table(
    "admin_codes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("code", String(20), nullable=False, unique=True),
    Column("name", String(255), nullable=False),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("last_used_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# RESELLERS TABLE (credit ledger lives in the credits column)
# ============================================================================
resellers_table = Table(
    "resellers",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("code", String(20), nullable=False, unique=True),
    Column("name", String(255), nullable=False),
    Column("credits", Integer, nullable=False, server_default="0"),
    Column("group_id", String(64), nullable=False),
    Column("group_name", String(255), nullable=True),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("last_used_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("credits >= 0", name="credits_non_negative"),
)

# ============================================================================
# INVITE LINKS TABLE
# ============================================================================
invite_links_table = Table(
    "invite_links",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("group_id", String(64), nullable=False),
    Column("group_name", String(255), nullable=True),
    Column("invite_url", Text, nullable=False),
    Column("access_code", String(20), nullable=False, unique=True),
    Column("status", String(32), nullable=False, server_default="active"),
    Column("created_by", String(20), nullable=False),
    Column("reseller_code", String(20), nullable=True),
    Column("client_email", String(255), nullable=True),
    Column("client_id", String(255), nullable=True),
    Column("note", Text, nullable=True),
    Column("receipt_ref", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("used_at", TIMESTAMP(timezone=True), nullable=True),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        "status IN ('active', 'used', 'expired', 'revoked', 'banned', 'closed_by_provider')",
        name="invite_link_status_valid",
    ),
)

Index("idx_invite_links_invite_url", invite_links_table.c.invite_url)
# Fallback departure match: latest used link of a group
Index(
    "idx_invite_links_group_status_used_at",
    invite_links_table.c.group_id,
    invite_links_table.c.status,
    invite_links_table.c.used_at,
)
Index("idx_invite_links_reseller_code", invite_links_table.c.reseller_code)

# ============================================================================
# AUDIT LOGS TABLE (append-only)
# ============================================================================
audit_logs_table = Table(
    "audit_logs",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("action", String(64), nullable=False),
    Column("entity_type", String(32), nullable=False),
    Column("entity_id", String(255), nullable=False),
    Column("details", JSONB, nullable=False, server_default="{}"),
    Column("performed_by", String(64), nullable=False),
    Column("reseller_code", String(20), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_audit_logs_entity",
    audit_logs_table.c.entity_type,
    audit_logs_table.c.entity_id,
)
Index("idx_audit_logs_created_at", audit_logs_table.c.created_at.desc())
# Re-delivered webhook updates are looked up by update id
Index(
    "idx_audit_logs_update_id",
    audit_logs_table.c.details["update_id"].astext,
    postgresql_where=audit_logs_table.c.details.has_key("update_id"),
)

# ============================================================================
# REVENUE TABLE
# ============================================================================
revenue_table = Table(
    "revenue",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("access_code", String(20), nullable=False),
    Column("amount", Numeric(12, 2), nullable=False),
    Column("link_id", UUID, nullable=True),
    Column("created_by", String(20), nullable=False),
    Column("description", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("amount >= 0", name="amount_non_negative"),
)

Index("idx_revenue_access_code", revenue_table.c.access_code)
