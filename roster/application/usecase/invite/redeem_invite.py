"""Redeem ephemeral invite use case."""

import logfire
from pydantic import BaseModel

from roster.application.usecase.base import BaseUseCase, CamelModel
from roster.domain.service import InviteLifecycleService, RedemptionResult
from roster.domain.value import AccountId, AccountProfile, Role


class RedeemInviteRequest(BaseModel):
    """Redeem invite request."""

    token: str
    account_id: str
    profile: AccountProfile = AccountProfile()


class RedeemInviteResponse(CamelModel):
    """Team the caller joined."""

    account_id: str
    role: Role
    pro_id: str
    claims_synced: bool

    @classmethod
    def from_result(cls, result: RedemptionResult) -> "RedeemInviteResponse":
        return cls(
            account_id=result.account.id,
            role=result.role,
            pro_id=result.pro_id,
            claims_synced=result.claims_synced,
        )


class RedeemInviteUseCase(BaseUseCase):
    """Use case for joining a team with a single-use invite."""

    def __init__(self, invite_lifecycle_service: InviteLifecycleService) -> None:
        self.invite_lifecycle_service = invite_lifecycle_service

    async def execute(self, request: RedeemInviteRequest) -> RedeemInviteResponse:
        """Redeem the invite for the calling account.

        Raises:
            NotFoundError: If the token matches no invite
            InvalidStateError: If the invite cannot be redeemed
        """
        with logfire.span("redeem_invite", account_id=request.account_id):
            result = await self.invite_lifecycle_service.redeem_ephemeral(
                request.token, AccountId(request.account_id), request.profile
            )
            return RedeemInviteResponse.from_result(result)
