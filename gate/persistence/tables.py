"""SQLAlchemy table definitions for Channel Gate.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# CODES TABLE
# ============================================================================
codes_table = Table(
    "codes",
    metadata,
    Column("code", String(10), primary_key=True),
    Column("duration_days", Integer, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("is_used", Boolean, nullable=False, server_default="false"),
    Column("used_by", BigInteger, nullable=True),  # Telegram user ID
    Column("used_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("duration_days IN (15, 30, 60)", name="codes_duration_check"),
    CheckConstraint(
        "(is_used AND used_by IS NOT NULL) OR (NOT is_used AND used_by IS NULL)",
        name="codes_used_by_check",
    ),
)

Index("idx_codes_used_by", codes_table.c.used_by)

# ============================================================================
# SUBSCRIPTIONS TABLE
# ============================================================================
subscriptions_table = Table(
    "subscriptions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", BigInteger, nullable=False),  # Telegram user ID
    Column("handle", String(255), nullable=False, server_default=""),
    Column("code", String(10), ForeignKey("codes.code"), nullable=False),
    Column("joined_at", TIMESTAMP(timezone=True), nullable=False),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column(
        "status",
        Enum(
            "active",
            "expired",
            "banned",
            name="subscription_status",
            create_type=False,
        ),
        nullable=False,
        server_default="active",
    ),
    Column("invite_link", Text, nullable=True),
    UniqueConstraint("user_id", "code", name="uq_subscriptions_user_code"),
)

# Join arbitration looks up a user's active subscriptions
Index(
    "idx_subscriptions_user_status",
    subscriptions_table.c.user_id,
    subscriptions_table.c.status,
)
# Sweeper scans active rows by expiry
Index(
    "idx_subscriptions_status_expires_at",
    subscriptions_table.c.status,
    subscriptions_table.c.expires_at,
)

# ============================================================================
# AUDIT ENTRIES TABLE
# ============================================================================
audit_entries_table = Table(
    "audit_entries",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("actor_id", BigInteger, nullable=True),  # NULL means the system
    Column("action", String(50), nullable=False),
    Column("context", JSONB, nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_audit_entries_created_at", audit_entries_table.c.created_at.desc())
Index(
    "idx_audit_entries_actor_action",
    audit_entries_table.c.actor_id,
    audit_entries_table.c.action,
)
