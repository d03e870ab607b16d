"""Validate ephemeral invite use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from roster.application.usecase.base import BaseUseCase, CamelModel
from roster.domain.model import EphemeralInvite
from roster.domain.service import InviteLifecycleService
from roster.domain.value import Role


class ValidateInviteRequest(BaseModel):
    """Validate invite request."""

    token: str


class ValidateInviteResponse(CamelModel):
    """Validate invite response."""

    valid: bool
    reason: str | None = None
    role: Role | None = None
    pro_id: str | None = None
    pro_name: str | None = None
    expires_at: datetime | None = None


class ValidateInviteUseCase(BaseUseCase):
    """Use case for validating a single-use invite token.

    This lets the frontend show who is inviting before the joiner signs in.
    """

    def __init__(self, invite_lifecycle_service: InviteLifecycleService) -> None:
        self.invite_lifecycle_service = invite_lifecycle_service

    async def execute(self, request: ValidateInviteRequest) -> ValidateInviteResponse:
        with logfire.span("validate_invite", token=request.token[:6] + "..."):
            validation = await self.invite_lifecycle_service.validate_ephemeral(
                request.token
            )
            invite = validation.invite
            if not validation.valid:
                logfire.info("Invite rejected", reason=validation.reason)
            return ValidateInviteResponse(
                valid=validation.valid,
                reason=validation.reason,
                role=invite.role if invite else None,
                pro_id=invite.pro_id if invite else None,
                pro_name=validation.pro.display_name if validation.pro else None,
                expires_at=(
                    invite.expires_at if isinstance(invite, EphemeralInvite) else None
                ),
            )
