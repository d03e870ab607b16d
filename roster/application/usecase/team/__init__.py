"""Team management use cases."""

from roster.application.usecase.team.cleanup_orphaned_account import (
    CleanupOrphanedAccountRequest,
    CleanupOrphanedAccountResponse,
    CleanupOrphanedAccountUseCase,
)
from roster.application.usecase.team.get_team import (
    GetTeamRequest,
    GetTeamResponse,
    GetTeamUseCase,
)
from roster.application.usecase.team.reconcile_team import (
    ReconcileTeamRequest,
    ReconcileTeamResponse,
    ReconcileTeamUseCase,
)
from roster.application.usecase.team.remove_member import (
    RemoveMemberRequest,
    RemoveMemberUseCase,
)

__all__ = [
    "CleanupOrphanedAccountRequest",
    "CleanupOrphanedAccountResponse",
    "CleanupOrphanedAccountUseCase",
    "GetTeamRequest",
    "GetTeamResponse",
    "GetTeamUseCase",
    "ReconcileTeamRequest",
    "ReconcileTeamResponse",
    "ReconcileTeamUseCase",
    "RemoveMemberRequest",
    "RemoveMemberUseCase",
]
