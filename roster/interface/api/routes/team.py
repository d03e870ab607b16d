"""Team management routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header

from roster.application.usecase.account import AccountView
from roster.application.usecase.team import (
    CleanupOrphanedAccountRequest,
    CleanupOrphanedAccountResponse,
    CleanupOrphanedAccountUseCase,
    GetTeamRequest,
    GetTeamResponse,
    GetTeamUseCase,
    ReconcileTeamRequest,
    ReconcileTeamResponse,
    ReconcileTeamUseCase,
    RemoveMemberRequest,
    RemoveMemberUseCase,
)
from roster.domain.service import IdentityProvider
from roster.interface.api.auth import authenticate
from roster.interface.api.schema import APIModel

router = APIRouter(prefix="/team", tags=["team"], route_class=DishkaRoute)


class CleanupOrphanedAccountAPIRequest(APIModel):
    """API request for deleting an orphaned identity."""

    email: str


@router.get("", response_model=GetTeamResponse)
async def get_team(
    get_team_use_case: FromDishka[GetTeamUseCase],
    identity_provider: FromDishka[IdentityProvider],
    authorization: str | None = Header(default=None),
) -> GetTeamResponse:
    """Get seat usage and members of the caller's team."""
    caller_id = await authenticate(identity_provider, authorization)
    return await get_team_use_case.execute(GetTeamRequest(caller_id=caller_id))


@router.delete("/members/{member_id}", response_model=AccountView)
async def remove_member(
    member_id: str,
    remove_member_use_case: FromDishka[RemoveMemberUseCase],
    identity_provider: FromDishka[IdentityProvider],
    authorization: str | None = Header(default=None),
) -> AccountView:
    """Remove a member from the caller's team.

    The member's account stays; it is marked inactive and detached.
    """
    caller_id = await authenticate(identity_provider, authorization)
    return await remove_member_use_case.execute(
        RemoveMemberRequest(caller_id=caller_id, member_id=member_id)
    )


@router.post("/reconcile", response_model=ReconcileTeamResponse)
async def reconcile_team(
    reconcile_use_case: FromDishka[ReconcileTeamUseCase],
    identity_provider: FromDishka[IdentityProvider],
    authorization: str | None = Header(default=None),
) -> ReconcileTeamResponse:
    """Reset the caller's seat counters to the live member counts."""
    caller_id = await authenticate(identity_provider, authorization)
    return await reconcile_use_case.execute(ReconcileTeamRequest(caller_id=caller_id))


@router.post(
    "/orphaned-accounts/cleanup", response_model=CleanupOrphanedAccountResponse
)
async def cleanup_orphaned_account(
    request: CleanupOrphanedAccountAPIRequest,
    cleanup_use_case: FromDishka[CleanupOrphanedAccountUseCase],
    identity_provider: FromDishka[IdentityProvider],
    authorization: str | None = Header(default=None),
) -> CleanupOrphanedAccountResponse:
    """Delete an identity that never got an account document."""
    caller_id = await authenticate(identity_provider, authorization)
    return await cleanup_use_case.execute(
        CleanupOrphanedAccountRequest(caller_id=caller_id, email=request.email)
    )
