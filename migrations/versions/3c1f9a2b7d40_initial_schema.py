"""initial_schema

Create the schema for the invite link gate:
- Admin codes (privileged access codes)
- Resellers (credit ledger per reseller code)
- Invite links (one row per access code, status lifecycle)
- Audit logs (append-only, JSONB details)
- Revenue (priced issuances)

Revision ID: 3c1f9a2b7d40
Revises:
Create Date: 2026-09-28 14:12:05.331870

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a2b7d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid()
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    op.create_table(
        "admin_codes",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("code", sa.String(20), nullable=False, unique=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("last_used_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    )

    op.create_table(
        "resellers",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("code", sa.String(20), nullable=False, unique=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("credits", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("group_id", sa.String(64), nullable=False),
        sa.Column("group_name", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("last_used_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.CheckConstraint("credits >= 0", name="credits_non_negative"),
    )

    op.create_table(
        "invite_links",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("group_id", sa.String(64), nullable=False),
        sa.Column("group_name", sa.String(255), nullable=True),
        sa.Column("invite_url", sa.Text(), nullable=False),
        sa.Column("access_code", sa.String(20), nullable=False, unique=True),
        sa.Column("status", sa.String(32), nullable=False, server_default="active"),
        sa.Column("created_by", sa.String(20), nullable=False),
        sa.Column("reseller_code", sa.String(20), nullable=True),
        sa.Column("client_email", sa.String(255), nullable=True),
        sa.Column("client_id", sa.String(255), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("receipt_ref", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("used_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("expires_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.CheckConstraint(
            "status IN ('active', 'used', 'expired', 'revoked', 'banned', 'closed_by_provider')",
            name="invite_link_status_valid",
        ),
    )
    op.create_index("idx_invite_links_invite_url", "invite_links", ["invite_url"])
    op.create_index(
        "idx_invite_links_group_status_used_at",
        "invite_links",
        ["group_id", "status", "used_at"],
    )
    op.create_index(
        "idx_invite_links_reseller_code", "invite_links", ["reseller_code"]
    )

    op.create_table(
        "audit_logs",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("action", sa.String(64), nullable=False),
        sa.Column("entity_type", sa.String(32), nullable=False),
        sa.Column("entity_id", sa.String(255), nullable=False),
        sa.Column(
            "details",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("performed_by", sa.String(64), nullable=False),
        sa.Column("reseller_code", sa.String(20), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    )
    op.create_index("idx_audit_logs_entity", "audit_logs", ["entity_type", "entity_id"])
    op.execute("CREATE INDEX idx_audit_logs_created_at ON audit_logs (created_at DESC)")
    op.execute(
        "CREATE INDEX idx_audit_logs_update_id ON audit_logs ((details->>'update_id')) "
        "WHERE details ? 'update_id'"
    )

    op.create_table(
        "revenue",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("access_code", sa.String(20), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("link_id", postgresql.UUID(), nullable=True),
        sa.Column("created_by", sa.String(20), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.CheckConstraint("amount >= 0", name="amount_non_negative"),
    )
    op.create_index("idx_revenue_access_code", "revenue", ["access_code"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("revenue")
    op.drop_table("audit_logs")
    op.drop_table("invite_links")
    op.drop_table("resellers")
    op.drop_table("admin_codes")
