"""Activate or deactivate invite link use case."""

from pydantic import BaseModel

from roster.application.usecase.base import BaseUseCase
from roster.application.usecase.invite_link.get_invite_links import InviteLinkItem
from roster.config import Settings
from roster.domain.service import InviteLifecycleService, IssuedPersistentInvite
from roster.domain.value import AccountId, Role


class SetInviteLinkStatusRequest(BaseModel):
    """Set invite link status request."""

    caller_id: str
    role: Role
    active: bool


class SetInviteLinkStatusUseCase(BaseUseCase):
    """Use case for toggling an invite link on or off."""

    def __init__(
        self, invite_lifecycle_service: InviteLifecycleService, settings: Settings
    ) -> None:
        self.invite_lifecycle_service = invite_lifecycle_service
        self.settings = settings

    async def execute(self, request: SetInviteLinkStatusRequest) -> InviteLinkItem:
        invite = await self.invite_lifecycle_service.set_active(
            AccountId(request.caller_id), request.role, request.active
        )
        return InviteLinkItem.from_issued(
            IssuedPersistentInvite(invite=invite), self.settings
        )
