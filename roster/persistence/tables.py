"""SQLAlchemy table definitions for the roster.

They match the schema defined in Alembic migrations. Every mutable document
carries a version column used for optimistic concurrency.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ACCOUNTS TABLE (keyed by identity provider uid)
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", String(128), primary_key=True),
    Column("email", String(255), nullable=True),
    Column("display_name", String(255), nullable=True),
    Column("first_name", String(255), nullable=True),
    Column("last_name", String(255), nullable=True),
    Column("phone_number", String(64), nullable=True),
    Column("role", String(16), nullable=True),  # 'PRO', 'STAFF', 'ATHLETE'
    Column("pro_id", String(128), nullable=True),
    Column("pro_status", String(16), nullable=False, server_default="inactive"),
    Column("status", String(16), nullable=False, server_default="active"),
    Column("joined_via_invite", UUID(as_uuid=True), nullable=True),
    Column("joined_at", TIMESTAMP(timezone=True), nullable=True),
    Column("removed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("removed_by", String(128), nullable=True),
    Column("activated_at", TIMESTAMP(timezone=True), nullable=True),
    Column("activation_method", String(32), nullable=True),
    Column("free_access_activated_at", TIMESTAMP(timezone=True), nullable=True),
    Column("mirrored_claims", JSONB, nullable=True),
    Column("claims_synced_at", TIMESTAMP(timezone=True), nullable=True),
    Column("consistency_repaired_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("version", Integer, nullable=False, server_default="1"),
)

Index("idx_accounts_email", accounts_table.c.email)
Index(
    "idx_accounts_team",
    accounts_table.c.pro_id,
    accounts_table.c.role,
    accounts_table.c.status,
)

# ============================================================================
# EPHEMERAL INVITES TABLE (single-use, expiring)
# ============================================================================
ephemeral_invites_table = Table(
    "ephemeral_invites",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("pro_id", String(128), nullable=False),
    Column("role", String(16), nullable=False),
    Column("email", String(255), nullable=True),
    Column("token_digest", String(64), nullable=False, unique=True),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("claimed", Boolean, nullable=False, server_default="false"),
    Column("claimed_by", String(128), nullable=True),
    Column("claimed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("created_by", String(128), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("version", Integer, nullable=False, server_default="1"),
)

Index("idx_ephemeral_invites_pro_id", ephemeral_invites_table.c.pro_id)
Index("idx_ephemeral_invites_expires_at", ephemeral_invites_table.c.expires_at)

# ============================================================================
# PERSISTENT INVITES TABLE (one reusable link per PRO and role)
# ============================================================================
persistent_invites_table = Table(
    "persistent_invites",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("pro_id", String(128), nullable=False),
    Column("role", String(16), nullable=False),
    Column("token_digest", String(64), nullable=False, unique=True),
    Column("max_redemptions", Integer, nullable=False),
    Column("redeemed_count", Integer, nullable=False, server_default="0"),
    Column("active", Boolean, nullable=False, server_default="true"),
    Column("redemptions", JSONB, nullable=False, server_default="[]"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("version", Integer, nullable=False, server_default="1"),
    UniqueConstraint("pro_id", "role", name="uq_persistent_invite_pro_role"),
    CheckConstraint(
        "redeemed_count >= 0 AND redeemed_count <= max_redemptions",
        name="redeemed_count_within_limit",
    ),
)

# ============================================================================
# TEAMS TABLE (seat counters)
# ============================================================================
teams_table = Table(
    "teams",
    metadata,
    Column("pro_id", String(128), primary_key=True),
    Column("name", String(255), nullable=False, server_default="My Team"),
    Column("staff_count", Integer, nullable=False, server_default="0"),
    Column("athlete_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("version", Integer, nullable=False, server_default="1"),
    CheckConstraint("staff_count >= 0", name="staff_count_non_negative"),
    CheckConstraint("athlete_count >= 0", name="athlete_count_non_negative"),
)

# ============================================================================
# AUDIT LOGS TABLE (append-only)
# ============================================================================
audit_logs_table = Table(
    "audit_logs",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("action", String(64), nullable=False),
    Column("requester_id", String(128), nullable=False),
    Column("subject_id", String(255), nullable=False),
    Column("pro_id", String(128), nullable=True),
    Column("details", JSONB, nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_audit_logs_pro_id", audit_logs_table.c.pro_id)
Index("idx_audit_logs_created_at", audit_logs_table.c.created_at.desc())
