"""Refresh claims use case."""

from pydantic import BaseModel

from roster.application.usecase.account.view import AccountResponse
from roster.application.usecase.base import BaseUseCase
from roster.domain.service import AccountService
from roster.domain.value import AccountId


class RefreshClaimsRequest(BaseModel):
    """Refresh claims request."""

    account_id: str


class RefreshClaimsUseCase(BaseUseCase):
    """Use case for pushing the caller's claims to the identity provider."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: RefreshClaimsRequest) -> AccountResponse:
        outcome = await self.account_service.refresh_claims(
            AccountId(request.account_id)
        )
        return AccountResponse.from_outcome(outcome)
