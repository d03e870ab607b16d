"""Repair PRO account use case."""

import logfire
from pydantic import BaseModel

from roster.application.usecase.account.view import AccountResponse
from roster.application.usecase.base import BaseUseCase
from roster.domain.service import AccountService
from roster.domain.value import AccountId


class RepairAccountRequest(BaseModel):
    """Repair account request."""

    account_id: str


class RepairAccountUseCase(BaseUseCase):
    """Use case for a PRO asking for their account to be made consistent."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: RepairAccountRequest) -> AccountResponse:
        """Run the consistency pass over the caller's account.

        Raises:
            ForbiddenError: If the caller is not a PRO
        """
        with logfire.span("repair_account", account_id=request.account_id):
            outcome = await self.account_service.repair_pro_account(
                AccountId(request.account_id)
            )
            if outcome.repaired:
                logfire.warn("PRO account repaired", account_id=request.account_id)
            return AccountResponse.from_outcome(outcome)
