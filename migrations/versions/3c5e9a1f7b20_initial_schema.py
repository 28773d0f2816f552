"""initial_schema

Create the schema for the channel gate:
- Codes (single-use redemption tokens)
- Subscriptions (one per user and code, time-limited)
- Audit entries (append-only event log)

Revision ID: 3c5e9a1f7b20
Revises:
Create Date: 2024-01-01 00:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c5e9a1f7b20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() on PostgreSQL < 13
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE subscription_status AS ENUM ('active', 'expired', 'banned');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # CODES table
    # ========================================================================
    op.create_table(
        "codes",
        sa.Column("code", sa.String(10), nullable=False),
        sa.Column("duration_days", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("is_used", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("used_by", sa.BigInteger(), nullable=True),
        sa.Column("used_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("code"),
        sa.CheckConstraint(
            "duration_days IN (15, 30, 60)", name="codes_duration_check"
        ),
        sa.CheckConstraint(
            "(is_used AND used_by IS NOT NULL) OR (NOT is_used AND used_by IS NULL)",
            name="codes_used_by_check",
        ),
    )
    op.create_index("idx_codes_used_by", "codes", ["used_by"])

    # ========================================================================
    # SUBSCRIPTIONS table
    # ========================================================================
    op.create_table(
        "subscriptions",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("handle", sa.String(255), nullable=False, server_default=""),
        sa.Column("code", sa.String(10), nullable=False),
        sa.Column("joined_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(
                "active",
                "expired",
                "banned",
                name="subscription_status",
                create_type=False,
            ),
            nullable=False,
            server_default="active",
        ),
        sa.Column("invite_link", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["code"], ["codes.code"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "code", name="uq_subscriptions_user_code"),
    )
    op.create_index(
        "idx_subscriptions_user_status", "subscriptions", ["user_id", "status"]
    )
    op.create_index(
        "idx_subscriptions_status_expires_at",
        "subscriptions",
        ["status", "expires_at"],
    )

    # ========================================================================
    # AUDIT_ENTRIES table
    # ========================================================================
    op.create_table(
        "audit_entries",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("actor_id", sa.BigInteger(), nullable=True),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column(
            "context",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_audit_entries_created_at",
        "audit_entries",
        [sa.text("created_at DESC")],
    )
    op.create_index(
        "idx_audit_entries_actor_action", "audit_entries", ["actor_id", "action"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("audit_entries")
    op.drop_table("subscriptions")
    op.drop_table("codes")

    op.execute("DROP TYPE IF EXISTS subscription_status")
