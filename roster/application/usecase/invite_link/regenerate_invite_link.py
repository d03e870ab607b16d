"""Regenerate invite link use case."""

import logfire
from pydantic import BaseModel

from roster.application.usecase.base import BaseUseCase
from roster.application.usecase.invite_link.get_invite_links import InviteLinkItem
from roster.config import Settings
from roster.domain.service import InviteLifecycleService
from roster.domain.value import AccountId, Role


class RegenerateInviteLinkRequest(BaseModel):
    """Regenerate invite link request."""

    caller_id: str
    role: Role


class RegenerateInviteLinkUseCase(BaseUseCase):
    """Use case for replacing an invite link's code.

    The old code stops working and the redemption count starts over.
    """

    def __init__(
        self, invite_lifecycle_service: InviteLifecycleService, settings: Settings
    ) -> None:
        self.invite_lifecycle_service = invite_lifecycle_service
        self.settings = settings

    async def execute(self, request: RegenerateInviteLinkRequest) -> InviteLinkItem:
        with logfire.span(
            "regenerate_invite_link",
            caller_id=request.caller_id,
            role=request.role.value,
        ):
            issued = await self.invite_lifecycle_service.regenerate(
                AccountId(request.caller_id), request.role
            )
            return InviteLinkItem.from_issued(issued, self.settings)
