"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from enum import Enum
from typing import Any, Dict

from roster.domain.model import (
    Account,
    AuditEntry,
    EphemeralInvite,
    PersistentInvite,
    Redemption,
    Team,
)
from roster.domain.value import (
    AccountClaims,
    AccountId,
    ActivationMethod,
    AuditAction,
    AuditEntryId,
    InviteId,
    MembershipStatus,
    ProStatus,
    Role,
    TokenDigest,
)


def _plain(data: Dict[str, Any]) -> Dict[str, Any]:
    """Replace enum members with their wire values."""
    return {k: v.value if isinstance(v, Enum) else v for k, v in data.items()}


def _optional_account_id(value: str | None) -> AccountId | None:
    return AccountId(value) if value is not None else None


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model.

    Args:
        row: Database row as dict

    Returns:
        Account domain model
    """
    claims = row.get("mirrored_claims")
    return Account(
        id=AccountId(row["id"]),
        email=row.get("email"),
        display_name=row.get("display_name"),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        phone_number=row.get("phone_number"),
        role=Role(row["role"]) if row.get("role") else None,
        pro_id=_optional_account_id(row.get("pro_id")),
        pro_status=ProStatus(row["pro_status"]),
        status=MembershipStatus(row["status"]),
        joined_via_invite=(
            InviteId(row["joined_via_invite"]) if row.get("joined_via_invite") else None
        ),
        joined_at=row.get("joined_at"),
        removed_at=row.get("removed_at"),
        removed_by=_optional_account_id(row.get("removed_by")),
        activated_at=row.get("activated_at"),
        activation_method=(
            ActivationMethod(row["activation_method"])
            if row.get("activation_method")
            else None
        ),
        free_access_activated_at=row.get("free_access_activated_at"),
        mirrored_claims=AccountClaims.model_validate(claims) if claims else None,
        claims_synced_at=row.get("claims_synced_at"),
        consistency_repaired_at=row.get("consistency_repaired_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        version=row["version"],
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict.

    Args:
        account: Account domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = _plain(account.model_dump(exclude={"mirrored_claims"}))
    data["mirrored_claims"] = (
        account.mirrored_claims.model_dump(mode="json")
        if account.mirrored_claims
        else None
    )
    return data


def row_to_ephemeral_invite(row: Dict[str, Any]) -> EphemeralInvite:
    """Convert database row to EphemeralInvite domain model."""
    return EphemeralInvite(
        id=InviteId(row["id"]),
        pro_id=AccountId(row["pro_id"]),
        role=Role(row["role"]),
        email=row.get("email"),
        token_digest=TokenDigest(row["token_digest"]),
        expires_at=row["expires_at"],
        claimed=row["claimed"],
        claimed_by=_optional_account_id(row.get("claimed_by")),
        claimed_at=row.get("claimed_at"),
        created_by=AccountId(row["created_by"]),
        created_at=row["created_at"],
        version=row["version"],
    )


def ephemeral_invite_to_dict(invite: EphemeralInvite) -> Dict[str, Any]:
    """Convert EphemeralInvite domain model to database dict."""
    return _plain(invite.model_dump(exclude={"kind"}))


def row_to_persistent_invite(row: Dict[str, Any]) -> PersistentInvite:
    """Convert database row to PersistentInvite domain model."""
    return PersistentInvite(
        id=InviteId(row["id"]),
        pro_id=AccountId(row["pro_id"]),
        role=Role(row["role"]),
        token_digest=TokenDigest(row["token_digest"]),
        max_redemptions=row["max_redemptions"],
        redeemed_count=row["redeemed_count"],
        active=row["active"],
        redemptions=tuple(
            Redemption.model_validate(entry) for entry in row.get("redemptions") or []
        ),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        version=row["version"],
    )


def persistent_invite_to_dict(invite: PersistentInvite) -> Dict[str, Any]:
    """Convert PersistentInvite domain model to database dict.

    The redemption log is stored as a JSON array.
    """
    data = _plain(invite.model_dump(exclude={"kind", "redemptions"}))
    data["redemptions"] = [r.model_dump(mode="json") for r in invite.redemptions]
    return data


def row_to_team(row: Dict[str, Any]) -> Team:
    """Convert database row to Team domain model."""
    return Team(
        pro_id=AccountId(row["pro_id"]),
        name=row["name"],
        staff_count=row["staff_count"],
        athlete_count=row["athlete_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        version=row["version"],
    )


def team_to_dict(team: Team) -> Dict[str, Any]:
    """Convert Team domain model to database dict."""
    return team.model_dump()


def row_to_audit_entry(row: Dict[str, Any]) -> AuditEntry:
    """Convert database row to AuditEntry domain model."""
    return AuditEntry(
        id=AuditEntryId(row["id"]),
        action=AuditAction(row["action"]),
        requester_id=AccountId(row["requester_id"]),
        subject_id=row["subject_id"],
        pro_id=_optional_account_id(row.get("pro_id")),
        details=row.get("details") or {},
        created_at=row["created_at"],
    )


def audit_entry_to_dict(entry: AuditEntry) -> Dict[str, Any]:
    """Convert AuditEntry domain model to database dict."""
    return _plain(entry.model_dump())
