"""Get team use case."""

import logfire
from pydantic import BaseModel

from roster.application.usecase.account.view import AccountView
from roster.application.usecase.base import BaseUseCase, CamelModel
from roster.domain.service import TeamService
from roster.domain.value import AccountId, Role


class SeatItem(CamelModel):
    """Seat usage for one role."""

    role: Role
    count: int
    limit: int
    remaining: int


class GetTeamRequest(BaseModel):
    """Get team request."""

    caller_id: str


class GetTeamResponse(CamelModel):
    """The caller's team."""

    pro_id: str
    name: str
    seats: list[SeatItem]
    members: list[AccountView]


class GetTeamUseCase(BaseUseCase):
    """Use case for a PRO viewing their team."""

    def __init__(self, team_service: TeamService) -> None:
        """Initialize use case.

        Args:
            team_service: Team domain service
        """
        self.team_service = team_service

    async def execute(self, request: GetTeamRequest) -> GetTeamResponse:
        """Seat usage and active members.

        Raises:
            ForbiddenError: If the caller is not a PRO
        """
        with logfire.span("get_team", caller_id=request.caller_id):
            roster = await self.team_service.get_roster(AccountId(request.caller_id))
            return GetTeamResponse(
                pro_id=roster.pro_id,
                name=roster.name,
                seats=[
                    SeatItem(
                        role=seat.role,
                        count=seat.count,
                        limit=seat.limit,
                        remaining=seat.remaining,
                    )
                    for seat in roster.seats
                ],
                members=[AccountView.from_account(m) for m in roster.members],
            )
