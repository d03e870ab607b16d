"""Reconcile all seat counters use case."""

import logfire
from pydantic import BaseModel

from roster.application.usecase.base import BaseUseCase
from roster.application.usecase.team.reconcile_team import ReconcileTeamResponse
from roster.domain.service import SeatLedger


class ReconcileSeatsRequest(BaseModel):
    """Reconcile all teams request."""


class ReconcileSeatsResponse(BaseModel):
    """Teams whose counters were corrected or created."""

    checked: int
    changed: list[ReconcileTeamResponse]


class ReconcileSeatsUseCase(BaseUseCase):
    """Use case for the periodic pass that repairs seat counter drift."""

    def __init__(self, seat_ledger: SeatLedger) -> None:
        self.seat_ledger = seat_ledger

    async def execute(self, request: ReconcileSeatsRequest) -> ReconcileSeatsResponse:
        with logfire.span("reconcile_seats"):
            results = await self.seat_ledger.reconcile_all()
            changed = [
                ReconcileTeamResponse.from_result(r) for r in results if r.changed
            ]
            return ReconcileSeatsResponse(checked=len(results), changed=changed)
