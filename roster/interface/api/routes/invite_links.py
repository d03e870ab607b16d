"""Invite link routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header
from pydantic import AliasChoices, Field

from roster.application.usecase.invite.redeem_invite import RedeemInviteResponse
from roster.application.usecase.invite_link import (
    GetInviteLinksRequest,
    GetInviteLinksResponse,
    GetInviteLinksUseCase,
    InviteLinkItem,
    RedeemInviteLinkRequest,
    RedeemInviteLinkUseCase,
    RegenerateInviteLinkRequest,
    RegenerateInviteLinkUseCase,
    SetInviteLinkStatusRequest,
    SetInviteLinkStatusUseCase,
    ValidateInviteLinkRequest,
    ValidateInviteLinkResponse,
    ValidateInviteLinkUseCase,
)
from roster.domain.service import IdentityProvider
from roster.domain.value import Role
from roster.interface.api.auth import authenticate
from roster.interface.api.schema import APIModel, ProfileFields

router = APIRouter(
    prefix="/invite-links", tags=["invite-links"], route_class=DishkaRoute
)

_CODE_ALIASES = AliasChoices("inviteCode", "code", "invite_code")


class RoleAPIRequest(APIModel):
    """API request naming one of the caller's links."""

    role: Role


class SetStatusAPIRequest(APIModel):
    """API request for activating or deactivating a link."""

    role: Role
    active: bool


class ValidateInviteLinkAPIRequest(APIModel):
    """API request for validating an invite code."""

    invite_code: str = Field(validation_alias=_CODE_ALIASES)


class RedeemInviteLinkAPIRequest(ProfileFields):
    """API request for redeeming an invite code."""

    invite_code: str = Field(validation_alias=_CODE_ALIASES)


@router.get("", response_model=GetInviteLinksResponse)
async def get_invite_links(
    get_invite_links_use_case: FromDishka[GetInviteLinksUseCase],
    identity_provider: FromDishka[IdentityProvider],
    authorization: str | None = Header(default=None),
) -> GetInviteLinksResponse:
    """Get the caller's STAFF and ATHLETE links, creating them on first use.

    inviteCode is only included for a link created by this request.
    """
    caller_id = await authenticate(identity_provider, authorization)
    return await get_invite_links_use_case.execute(
        GetInviteLinksRequest(caller_id=caller_id)
    )


@router.post("/regenerate", response_model=InviteLinkItem)
async def regenerate_invite_link(
    request: RoleAPIRequest,
    regenerate_use_case: FromDishka[RegenerateInviteLinkUseCase],
    identity_provider: FromDishka[IdentityProvider],
    authorization: str | None = Header(default=None),
) -> InviteLinkItem:
    """Issue a new code for a link. The old code stops working."""
    caller_id = await authenticate(identity_provider, authorization)
    return await regenerate_use_case.execute(
        RegenerateInviteLinkRequest(caller_id=caller_id, role=request.role)
    )


@router.post("/status", response_model=InviteLinkItem)
async def set_invite_link_status(
    request: SetStatusAPIRequest,
    set_status_use_case: FromDishka[SetInviteLinkStatusUseCase],
    identity_provider: FromDishka[IdentityProvider],
    authorization: str | None = Header(default=None),
) -> InviteLinkItem:
    """Activate or deactivate a link."""
    caller_id = await authenticate(identity_provider, authorization)
    return await set_status_use_case.execute(
        SetInviteLinkStatusRequest(
            caller_id=caller_id, role=request.role, active=request.active
        )
    )


@router.post("/validate", response_model=ValidateInviteLinkResponse)
async def validate_invite_link(
    request: ValidateInviteLinkAPIRequest,
    validate_use_case: FromDishka[ValidateInviteLinkUseCase],
) -> ValidateInviteLinkResponse:
    """Check an invite code. Does not require authentication."""
    return await validate_use_case.execute(
        ValidateInviteLinkRequest(invite_code=request.invite_code)
    )


@router.post("/redeem", response_model=RedeemInviteResponse)
async def redeem_invite_link(
    request: RedeemInviteLinkAPIRequest,
    redeem_use_case: FromDishka[RedeemInviteLinkUseCase],
    identity_provider: FromDishka[IdentityProvider],
    authorization: str | None = Header(default=None),
) -> RedeemInviteResponse:
    """Join a team through an invite code as the authenticated caller."""
    account_id = await authenticate(identity_provider, authorization)
    return await redeem_use_case.execute(
        RedeemInviteLinkRequest(
            invite_code=request.invite_code,
            account_id=account_id,
            profile=request.profile(),
        )
    )
