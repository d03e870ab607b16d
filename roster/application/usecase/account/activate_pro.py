"""Activate PRO account use case."""

import logfire
from pydantic import BaseModel

from roster.application.usecase.account.view import AccountResponse
from roster.application.usecase.base import BaseUseCase
from roster.domain.service import AccountService
from roster.domain.value import AccountId, ActivationMethod


class ActivateProRequest(BaseModel):
    """Activate PRO request."""

    account_id: str
    method: ActivationMethod
    free_access_code: str | None = None
    payment_reference: str | None = None


class ActivateProUseCase(BaseUseCase):
    """Use case for activating the caller's PRO subscription."""

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: ActivateProRequest) -> AccountResponse:
        """Activate with free access or a completed payment.

        Raises:
            ValidationError: If payment is used without a reference
            ForbiddenError: If the free access code is wrong
            InvalidStateError: If the account cannot be activated
        """
        with logfire.span(
            "activate_pro",
            account_id=request.account_id,
            method=request.method.value,
        ):
            outcome = await self.account_service.activate_pro(
                AccountId(request.account_id),
                request.method,
                free_access_code=request.free_access_code,
                payment_reference=request.payment_reference,
            )
            return AccountResponse.from_outcome(outcome)
