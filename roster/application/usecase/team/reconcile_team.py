"""Reconcile team use case."""

from pydantic import BaseModel

from roster.application.usecase.base import BaseUseCase, CamelModel
from roster.domain.service import ReconciliationResult, TeamService
from roster.domain.value import AccountId


class ReconcileTeamRequest(BaseModel):
    """Reconcile team request."""

    caller_id: str


class ReconcileTeamResponse(CamelModel):
    """Seat counters before and after reconciliation."""

    pro_id: str
    staff_before: int | None
    staff_after: int
    athlete_before: int | None
    athlete_after: int
    created: bool
    changed: bool

    @classmethod
    def from_result(cls, result: ReconciliationResult) -> "ReconcileTeamResponse":
        return cls(
            pro_id=result.pro_id,
            staff_before=result.staff_before,
            staff_after=result.staff_after,
            athlete_before=result.athlete_before,
            athlete_after=result.athlete_after,
            created=result.created,
            changed=result.changed,
        )


class ReconcileTeamUseCase(BaseUseCase):
    """Use case for a PRO resetting their seat counters to live counts."""

    def __init__(self, team_service: TeamService) -> None:
        self.team_service = team_service

    async def execute(self, request: ReconcileTeamRequest) -> ReconcileTeamResponse:
        result = await self.team_service.reconcile_team(AccountId(request.caller_id))
        return ReconcileTeamResponse.from_result(result)
