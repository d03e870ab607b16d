"""Get current account use case."""

from pydantic import BaseModel

from roster.application.usecase.account.view import AccountResponse
from roster.application.usecase.base import BaseUseCase
from roster.domain.service import AccountService
from roster.domain.value import AccountId


class GetMyAccountRequest(BaseModel):
    """Get current account request."""

    account_id: str


class GetMyAccountUseCase(BaseUseCase):
    """Use case for reading the caller's account.

    Reading also repairs drifted PRO fields and re-mirrors stale claims.
    """

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: GetMyAccountRequest) -> AccountResponse:
        outcome = await self.account_service.get_account(AccountId(request.account_id))
        return AccountResponse.from_outcome(outcome)
