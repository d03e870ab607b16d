"""Account routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status

from roster.application.usecase.account import (
    AccountResponse,
    ActivateProRequest,
    ActivateProUseCase,
    GetMyAccountRequest,
    GetMyAccountUseCase,
    RefreshClaimsRequest,
    RefreshClaimsUseCase,
    RegisterAccountRequest,
    RegisterAccountUseCase,
    RepairAccountRequest,
    RepairAccountUseCase,
)
from roster.domain.service import IdentityProvider
from roster.domain.value import ActivationMethod, Role
from roster.interface.api.auth import authenticate
from roster.interface.api.schema import APIModel, ProfileFields

router = APIRouter(prefix="/accounts", tags=["accounts"], route_class=DishkaRoute)


class RegisterAccountAPIRequest(ProfileFields):
    """API request for creating the caller's account."""

    role: Role


class ActivateProAPIRequest(APIModel):
    """API request for activating a PRO subscription."""

    method: ActivationMethod
    free_access_code: str | None = None
    payment_reference: str | None = None


@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
async def register_account(
    request: RegisterAccountAPIRequest,
    register_use_case: FromDishka[RegisterAccountUseCase],
    identity_provider: FromDishka[IdentityProvider],
    authorization: str | None = Header(default=None),
) -> AccountResponse:
    """Create the account document for the authenticated identity."""
    account_id = await authenticate(identity_provider, authorization)
    return await register_use_case.execute(
        RegisterAccountRequest(
            account_id=account_id, role=request.role, profile=request.profile()
        )
    )


@router.get("/me", response_model=AccountResponse)
async def get_my_account(
    get_my_account_use_case: FromDishka[GetMyAccountUseCase],
    identity_provider: FromDishka[IdentityProvider],
    authorization: str | None = Header(default=None),
) -> AccountResponse:
    """Get the caller's account, repairing it if it has drifted."""
    account_id = await authenticate(identity_provider, authorization)
    return await get_my_account_use_case.execute(
        GetMyAccountRequest(account_id=account_id)
    )


@router.post("/me/activate", response_model=AccountResponse)
async def activate_pro(
    request: ActivateProAPIRequest,
    activate_use_case: FromDishka[ActivateProUseCase],
    identity_provider: FromDishka[IdentityProvider],
    authorization: str | None = Header(default=None),
) -> AccountResponse:
    """Activate the caller's PRO subscription."""
    account_id = await authenticate(identity_provider, authorization)
    return await activate_use_case.execute(
        ActivateProRequest(
            account_id=account_id,
            method=request.method,
            free_access_code=request.free_access_code,
            payment_reference=request.payment_reference,
        )
    )


@router.post("/me/claims/refresh", response_model=AccountResponse)
async def refresh_claims(
    refresh_use_case: FromDishka[RefreshClaimsUseCase],
    identity_provider: FromDishka[IdentityProvider],
    authorization: str | None = Header(default=None),
) -> AccountResponse:
    """Push the caller's role and team claims to the identity provider."""
    account_id = await authenticate(identity_provider, authorization)
    return await refresh_use_case.execute(RefreshClaimsRequest(account_id=account_id))


@router.post("/me/repair", response_model=AccountResponse)
async def repair_account(
    repair_use_case: FromDishka[RepairAccountUseCase],
    identity_provider: FromDishka[IdentityProvider],
    authorization: str | None = Header(default=None),
) -> AccountResponse:
    """Make a PRO account consistent with itself and its claims."""
    account_id = await authenticate(identity_provider, authorization)
    return await repair_use_case.execute(RepairAccountRequest(account_id=account_id))
