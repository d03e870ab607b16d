"""Payment event intake routes."""

import hmac

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header

from roster.application.usecase.payment import (
    ApplyPaymentEventResponse,
    ApplyPaymentEventUseCase,
)
from roster.config import PaymentSettings
from roster.domain.error import UnauthenticatedError
from roster.domain.value import PaymentEvent

router = APIRouter(prefix="/payments", tags=["payments"], route_class=DishkaRoute)


@router.post("/events", response_model=ApplyPaymentEventResponse)
async def receive_payment_event(
    event: PaymentEvent,
    apply_use_case: FromDishka[ApplyPaymentEventUseCase],
    payment_settings: FromDishka[PaymentSettings],
    x_event_secret: str | None = Header(default=None),
) -> ApplyPaymentEventResponse:
    """Apply a completed payment reported by the payment processor.

    The sender authenticates with the shared secret in X-Event-Secret.
    """
    expected = payment_settings.event_secret.encode()
    if not x_event_secret or not hmac.compare_digest(
        x_event_secret.encode(), expected
    ):
        raise UnauthenticatedError("Invalid event secret")
    return await apply_use_case.execute(event)
