"""Register account use case."""

import logfire
from pydantic import BaseModel

from roster.application.usecase.account.view import AccountResponse
from roster.application.usecase.base import BaseUseCase
from roster.domain.service import AccountService
from roster.domain.value import AccountId, AccountProfile, Role


class RegisterAccountRequest(BaseModel):
    """Register account request."""

    account_id: str
    role: Role
    profile: AccountProfile = AccountProfile()


class RegisterAccountUseCase(BaseUseCase):
    """Use case for creating the caller's account after sign-up."""

    def __init__(self, account_service: AccountService) -> None:
        """Initialize use case.

        Args:
            account_service: Account domain service
        """
        self.account_service = account_service

    async def execute(self, request: RegisterAccountRequest) -> AccountResponse:
        """Create the account.

        Raises:
            InvalidStateError: If the account already exists
        """
        with logfire.span("register_account", account_id=request.account_id):
            outcome = await self.account_service.register(
                AccountId(request.account_id), request.profile, request.role
            )
            return AccountResponse.from_outcome(outcome)
