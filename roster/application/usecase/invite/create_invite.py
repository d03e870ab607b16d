"""Create ephemeral invite use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from roster.application.usecase.base import BaseUseCase, CamelModel
from roster.config import Settings
from roster.domain.service import InviteLifecycleService
from roster.domain.value import AccountId, Role


class CreateInviteRequest(BaseModel):
    """Request to create a single-use invite."""

    caller_id: str
    role: Role
    email: str | None = None


class CreateInviteResponse(CamelModel):
    """Created invite. token is shown here and never again."""

    invite_id: str
    token: str
    join_url: str
    role: Role
    pro_id: str
    expires_at: datetime


class CreateInviteUseCase(BaseUseCase):
    """Use case for a PRO issuing a single-use invite."""

    def __init__(
        self, invite_lifecycle_service: InviteLifecycleService, settings: Settings
    ) -> None:
        """Initialize use case.

        Args:
            invite_lifecycle_service: Invite lifecycle domain service
            settings: Application settings
        """
        self.invite_lifecycle_service = invite_lifecycle_service
        self.settings = settings

    async def execute(self, request: CreateInviteRequest) -> CreateInviteResponse:
        """Create the invite and build its join URL.

        Raises:
            ForbiddenError: If the caller is not a PRO
            InvalidStateError: If the PRO is inactive or the role is full
        """
        with logfire.span(
            "create_invite", caller_id=request.caller_id, role=request.role.value
        ):
            issued = await self.invite_lifecycle_service.create_ephemeral(
                AccountId(request.caller_id), request.role, request.email
            )
            secret = issued.secret.root
            return CreateInviteResponse(
                invite_id=str(issued.invite.id),
                token=secret,
                join_url=self.settings.join_url(secret),
                role=issued.invite.role,
                pro_id=issued.invite.pro_id,
                expires_at=issued.invite.expires_at,
            )
