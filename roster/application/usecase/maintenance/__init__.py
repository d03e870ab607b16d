"""Maintenance use cases run from scripts."""

from roster.application.usecase.maintenance.reconcile_seats import (
    ReconcileSeatsRequest,
    ReconcileSeatsResponse,
    ReconcileSeatsUseCase,
)
from roster.application.usecase.maintenance.sweep_expired_invites import (
    SweepExpiredInvitesRequest,
    SweepExpiredInvitesResponse,
    SweepExpiredInvitesUseCase,
)

__all__ = [
    "ReconcileSeatsRequest",
    "ReconcileSeatsResponse",
    "ReconcileSeatsUseCase",
    "SweepExpiredInvitesRequest",
    "SweepExpiredInvitesResponse",
    "SweepExpiredInvitesUseCase",
]
