"""Domain services."""

from .account_service import AccountService
from .base import Service
from .consistency_guardian import ConsistencyGuardian, GuardianOutcome
from .identity_provider import IdentityProvider
from .invite_lifecycle import (
    InviteLifecycleService,
    InviteValidation,
    IssuedEphemeralInvite,
    IssuedPersistentInvite,
    RedemptionResult,
)
from .seat_ledger import ReconciliationResult, SeatDecision, SeatLedger
from .seat_policy import SeatPolicy
from .team_service import RoleSeats, TeamRoster, TeamService
from .token_codec import TokenCodec

__all__ = [
    "AccountService",
    "ConsistencyGuardian",
    "GuardianOutcome",
    "IdentityProvider",
    "InviteLifecycleService",
    "InviteValidation",
    "IssuedEphemeralInvite",
    "IssuedPersistentInvite",
    "ReconciliationResult",
    "RedemptionResult",
    "RoleSeats",
    "SeatDecision",
    "SeatLedger",
    "SeatPolicy",
    "Service",
    "TeamRoster",
    "TeamService",
    "TokenCodec",
]
