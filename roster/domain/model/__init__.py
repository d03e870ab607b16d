"""Domain model entities for the roster."""

from roster.domain.model.account import Account
from roster.domain.model.audit import AuditEntry
from roster.domain.model.invite import (
    EphemeralInvite,
    EphemeralInviteState,
    Invite,
    PersistentInvite,
    Redemption,
)
from roster.domain.model.team import Team

Document = Account | EphemeralInvite | PersistentInvite | Team

__all__ = [
    "Account",
    "AuditEntry",
    "Document",
    "EphemeralInvite",
    "EphemeralInviteState",
    "Invite",
    "PersistentInvite",
    "Redemption",
    "Team",
]
