"""Single-use invite routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status

from roster.application.usecase.invite import (
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
    RedeemInviteRequest,
    RedeemInviteResponse,
    RedeemInviteUseCase,
    ValidateInviteRequest,
    ValidateInviteResponse,
    ValidateInviteUseCase,
)
from roster.domain.service import IdentityProvider
from roster.domain.value import Role
from roster.interface.api.auth import authenticate
from roster.interface.api.schema import APIModel, ProfileFields

router = APIRouter(prefix="/invites", tags=["invites"], route_class=DishkaRoute)


class CreateInviteAPIRequest(APIModel):
    """API request for creating a single-use invite."""

    role: Role
    email: str | None = None


class ValidateInviteAPIRequest(APIModel):
    """API request for validating an invite token."""

    token: str


class RedeemInviteAPIRequest(ProfileFields):
    """API request for redeeming an invite token."""

    token: str


@router.post(
    "", response_model=CreateInviteResponse, status_code=status.HTTP_201_CREATED
)
async def create_invite(
    request: CreateInviteAPIRequest,
    create_invite_use_case: FromDishka[CreateInviteUseCase],
    identity_provider: FromDishka[IdentityProvider],
    authorization: str | None = Header(default=None),
) -> CreateInviteResponse:
    """Create a single-use invite for the caller's team.

    The token in the response is the only copy; it cannot be retrieved later.
    """
    caller_id = await authenticate(identity_provider, authorization)
    return await create_invite_use_case.execute(
        CreateInviteRequest(caller_id=caller_id, role=request.role, email=request.email)
    )


@router.post("/validate", response_model=ValidateInviteResponse)
async def validate_invite(
    request: ValidateInviteAPIRequest,
    validate_invite_use_case: FromDishka[ValidateInviteUseCase],
) -> ValidateInviteResponse:
    """Check an invite token. Does not require authentication."""
    return await validate_invite_use_case.execute(
        ValidateInviteRequest(token=request.token)
    )


@router.post("/redeem", response_model=RedeemInviteResponse)
async def redeem_invite(
    request: RedeemInviteAPIRequest,
    redeem_invite_use_case: FromDishka[RedeemInviteUseCase],
    identity_provider: FromDishka[IdentityProvider],
    authorization: str | None = Header(default=None),
) -> RedeemInviteResponse:
    """Join the inviting PRO's team as the authenticated caller."""
    account_id = await authenticate(identity_provider, authorization)
    return await redeem_invite_use_case.execute(
        RedeemInviteRequest(
            token=request.token, account_id=account_id, profile=request.profile()
        )
    )
