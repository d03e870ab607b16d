"""Redeem invite link use case."""

import logfire
from pydantic import BaseModel

from roster.application.usecase.base import BaseUseCase
from roster.application.usecase.invite.redeem_invite import RedeemInviteResponse
from roster.domain.service import InviteLifecycleService
from roster.domain.value import AccountId, AccountProfile


class RedeemInviteLinkRequest(BaseModel):
    """Redeem invite link request."""

    invite_code: str
    account_id: str
    profile: AccountProfile = AccountProfile()


class RedeemInviteLinkUseCase(BaseUseCase):
    """Use case for joining a team through an invite link."""

    def __init__(self, invite_lifecycle_service: InviteLifecycleService) -> None:
        self.invite_lifecycle_service = invite_lifecycle_service

    async def execute(self, request: RedeemInviteLinkRequest) -> RedeemInviteResponse:
        """Redeem the link for the calling account.

        Raises:
            NotFoundError: If the code matches no link
            InvalidStateError: If the link cannot be redeemed
        """
        with logfire.span("redeem_invite_link", account_id=request.account_id):
            result = await self.invite_lifecycle_service.redeem_persistent(
                request.invite_code, AccountId(request.account_id), request.profile
            )
            return RedeemInviteResponse.from_result(result)
