"""Remove team member use case."""

import logfire
from pydantic import BaseModel

from roster.application.usecase.account.view import AccountView
from roster.application.usecase.base import BaseUseCase
from roster.domain.service import TeamService
from roster.domain.value import AccountId


class RemoveMemberRequest(BaseModel):
    """Remove member request."""

    caller_id: str
    member_id: str


class RemoveMemberUseCase(BaseUseCase):
    """Use case for a PRO removing someone from their team."""

    def __init__(self, team_service: TeamService) -> None:
        self.team_service = team_service

    async def execute(self, request: RemoveMemberRequest) -> AccountView:
        """Remove the member and free their seat.

        Raises:
            ForbiddenError: If the caller is not a PRO or the member is not on
                their team
            InvalidStateError: If the caller tries to remove themselves
            NotFoundError: If the member does not exist
        """
        with logfire.span(
            "remove_member", caller_id=request.caller_id, member_id=request.member_id
        ):
            removed = await self.team_service.remove_member(
                AccountId(request.caller_id), AccountId(request.member_id)
            )
            return AccountView.from_account(removed)
