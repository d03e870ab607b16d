"""Sweep expired invites use case."""

from datetime import datetime

from pydantic import BaseModel

from roster.application.usecase.base import BaseUseCase
from roster.domain.service import InviteLifecycleService


class SweepExpiredInvitesRequest(BaseModel):
    """Sweep request. now defaults to the service clock."""

    now: datetime | None = None


class SweepExpiredInvitesResponse(BaseModel):
    """Sweep result."""

    deleted: int


class SweepExpiredInvitesUseCase(BaseUseCase):
    """Use case for deleting single-use invites past their expiry."""

    def __init__(self, invite_lifecycle_service: InviteLifecycleService) -> None:
        self.invite_lifecycle_service = invite_lifecycle_service

    async def execute(
        self, request: SweepExpiredInvitesRequest
    ) -> SweepExpiredInvitesResponse:
        deleted = await self.invite_lifecycle_service.sweep_expired(request.now)
        return SweepExpiredInvitesResponse(deleted=deleted)
