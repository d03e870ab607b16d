"""initial_schema

Create the roster schema:
- Accounts (keyed by identity provider uid; role, team and PRO status)
- Ephemeral invites (single-use, expiring, one per token digest)
- Persistent invites (one reusable link per PRO and role)
- Teams (per-role seat counters)
- Audit logs (append-only record of privileged actions)

Revision ID: 3c1f9a7d2e40
Revises:
Create Date: 2025-11-04 10:12:45.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # ACCOUNTS table
    # ========================================================================
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(128), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("display_name", sa.String(255), nullable=True),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column("phone_number", sa.String(64), nullable=True),
        sa.Column("role", sa.String(16), nullable=True),  # 'PRO', 'STAFF', 'ATHLETE'
        sa.Column("pro_id", sa.String(128), nullable=True),
        sa.Column(
            "pro_status", sa.String(16), nullable=False, server_default="inactive"
        ),
        sa.Column("status", sa.String(16), nullable=False, server_default="active"),
        sa.Column("joined_via_invite", sa.UUID(), nullable=True),
        sa.Column("joined_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("removed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("removed_by", sa.String(128), nullable=True),
        sa.Column("activated_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("activation_method", sa.String(32), nullable=True),
        sa.Column(
            "free_access_activated_at", sa.TIMESTAMP(timezone=True), nullable=True
        ),
        sa.Column("mirrored_claims", postgresql.JSONB(), nullable=True),
        sa.Column("claims_synced_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "consistency_repaired_at", sa.TIMESTAMP(timezone=True), nullable=True
        ),
        *_timestamps(),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_accounts_email", "accounts", ["email"])
    op.create_index("idx_accounts_team", "accounts", ["pro_id", "role", "status"])

    # ========================================================================
    # EPHEMERAL_INVITES table
    # ========================================================================
    op.create_table(
        "ephemeral_invites",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("pro_id", sa.String(128), nullable=False),
        sa.Column("role", sa.String(16), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("token_digest", sa.String(64), nullable=False),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("claimed", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("claimed_by", sa.String(128), nullable=True),
        sa.Column("claimed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("created_by", sa.String(128), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token_digest"),
    )
    op.create_index(
        "idx_ephemeral_invites_pro_id", "ephemeral_invites", ["pro_id"]
    )
    op.create_index(
        "idx_ephemeral_invites_expires_at", "ephemeral_invites", ["expires_at"]
    )

    # ========================================================================
    # PERSISTENT_INVITES table
    # ========================================================================
    op.create_table(
        "persistent_invites",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("pro_id", sa.String(128), nullable=False),
        sa.Column("role", sa.String(16), nullable=False),
        sa.Column("token_digest", sa.String(64), nullable=False),
        sa.Column("max_redemptions", sa.Integer(), nullable=False),
        sa.Column(
            "redeemed_count", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column("active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column(
            "redemptions",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        *_timestamps(),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token_digest"),
        sa.UniqueConstraint("pro_id", "role", name="uq_persistent_invite_pro_role"),
        sa.CheckConstraint(
            "redeemed_count >= 0 AND redeemed_count <= max_redemptions",
            name="redeemed_count_within_limit",
        ),
    )

    # ========================================================================
    # TEAMS table
    # ========================================================================
    op.create_table(
        "teams",
        sa.Column("pro_id", sa.String(128), nullable=False),
        sa.Column("name", sa.String(255), nullable=False, server_default="My Team"),
        sa.Column("staff_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("athlete_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.PrimaryKeyConstraint("pro_id"),
        sa.CheckConstraint("staff_count >= 0", name="staff_count_non_negative"),
        sa.CheckConstraint("athlete_count >= 0", name="athlete_count_non_negative"),
    )

    # ========================================================================
    # AUDIT_LOGS table
    # ========================================================================
    op.create_table(
        "audit_logs",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("action", sa.String(64), nullable=False),
        sa.Column("requester_id", sa.String(128), nullable=False),
        sa.Column("subject_id", sa.String(255), nullable=False),
        sa.Column("pro_id", sa.String(128), nullable=True),
        sa.Column(
            "details",
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
    op.create_index("idx_audit_logs_pro_id", "audit_logs", ["pro_id"])
    op.create_index(
        "idx_audit_logs_created_at", "audit_logs", [sa.text("created_at DESC")]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("audit_logs")
    op.drop_table("teams")
    op.drop_table("persistent_invites")
    op.drop_table("ephemeral_invites")
    op.drop_table("accounts")
