"""Apply payment event use case."""

import logfire

from roster.application.usecase.base import BaseUseCase, CamelModel
from roster.domain.service import AccountService
from roster.domain.value import PaymentEvent


class ApplyPaymentEventResponse(CamelModel):
    """Whether the event changed an account."""

    applied: bool
    account_id: str
    claims_synced: bool | None = None


class ApplyPaymentEventUseCase(BaseUseCase):
    """Use case for the payment processor reporting a completed payment.

    Only PRO upgrades are acted on; training purchases are acknowledged.
    """

    def __init__(self, account_service: AccountService) -> None:
        self.account_service = account_service

    async def execute(self, request: PaymentEvent) -> ApplyPaymentEventResponse:
        with logfire.span(
            "apply_payment_event",
            account_id=str(request.account_id),
            payment_kind=request.payment_kind.value,
        ):
            outcome = await self.account_service.apply_payment_event(request)
            return ApplyPaymentEventResponse(
                applied=outcome is not None,
                account_id=request.account_id,
                claims_synced=outcome.claims_synced if outcome else None,
            )
