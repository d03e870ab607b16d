"""Payment event use cases."""

from roster.application.usecase.payment.apply_payment_event import (
    ApplyPaymentEventResponse,
    ApplyPaymentEventUseCase,
)

__all__ = [
    "ApplyPaymentEventResponse",
    "ApplyPaymentEventUseCase",
]
