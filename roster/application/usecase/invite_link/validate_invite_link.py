"""Validate invite link use case."""

import logfire
from pydantic import BaseModel

from roster.application.usecase.base import BaseUseCase, CamelModel
from roster.domain.model import PersistentInvite
from roster.domain.service import InviteLifecycleService
from roster.domain.value import Role


class ValidateInviteLinkRequest(BaseModel):
    """Validate invite link request."""

    invite_code: str


class ValidateInviteLinkResponse(CamelModel):
    """Validate invite link response."""

    valid: bool
    reason: str | None = None
    role: Role | None = None
    pro_id: str | None = None
    pro_name: str | None = None
    remaining: int | None = None


class ValidateInviteLinkUseCase(BaseUseCase):
    """Use case for checking an invite link before joining."""

    def __init__(self, invite_lifecycle_service: InviteLifecycleService) -> None:
        self.invite_lifecycle_service = invite_lifecycle_service

    async def execute(
        self, request: ValidateInviteLinkRequest
    ) -> ValidateInviteLinkResponse:
        with logfire.span(
            "validate_invite_link", invite_code=request.invite_code[:6] + "..."
        ):
            validation = await self.invite_lifecycle_service.validate_persistent(
                request.invite_code
            )
            invite = validation.invite
            return ValidateInviteLinkResponse(
                valid=validation.valid,
                reason=validation.reason,
                role=invite.role if invite else None,
                pro_id=invite.pro_id if invite else None,
                pro_name=validation.pro.display_name if validation.pro else None,
                remaining=(
                    invite.remaining if isinstance(invite, PersistentInvite) else None
                ),
            )
