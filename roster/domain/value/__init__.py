"""Domain value objects for the roster."""

from roster.domain.value.identifiers import AccountId, AuditEntryId, InviteId
from roster.domain.value.types import (
    AccountClaims,
    AccountProfile,
    ActivationMethod,
    AuditAction,
    InviteKind,
    InviteSecret,
    MembershipStatus,
    PaymentEvent,
    PaymentKind,
    ProStatus,
    Role,
    TokenDigest,
)

__all__ = [
    # Identifiers
    "AccountId",
    "AuditEntryId",
    "InviteId",
    # Types
    "AccountClaims",
    "AccountProfile",
    "ActivationMethod",
    "AuditAction",
    "InviteKind",
    "InviteSecret",
    "MembershipStatus",
    "PaymentEvent",
    "PaymentKind",
    "ProStatus",
    "Role",
    "TokenDigest",
]
