"""Get invite links use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from roster.application.usecase.base import BaseUseCase, CamelModel
from roster.config import Settings
from roster.domain.service import InviteLifecycleService, IssuedPersistentInvite
from roster.domain.value import AccountId, Role


class RedemptionItem(CamelModel):
    """One entry of an invite link's redemption log."""

    account_id: str
    email: str | None
    display_name: str | None
    redeemed_at: datetime


class InviteLinkItem(CamelModel):
    """Invite link in responses.

    invite_code and join_url are only present when the secret was minted by
    this request; the stored digest cannot be turned back into a code.
    """

    invite_id: str
    role: Role
    active: bool
    redeemed_count: int
    max_redemptions: int
    remaining: int
    invite_code: str | None = None
    join_url: str | None = None
    redemptions: list[RedemptionItem] = []

    @classmethod
    def from_issued(
        cls, issued: IssuedPersistentInvite, settings: Settings
    ) -> "InviteLinkItem":
        invite = issued.invite
        code = issued.secret.root if issued.secret else None
        return cls(
            invite_id=str(invite.id),
            role=invite.role,
            active=invite.active,
            redeemed_count=invite.redeemed_count,
            max_redemptions=invite.max_redemptions,
            remaining=invite.remaining,
            invite_code=code,
            join_url=settings.join_url(code) if code else None,
            redemptions=[
                RedemptionItem(
                    account_id=r.account_id,
                    email=r.email,
                    display_name=r.display_name,
                    redeemed_at=r.redeemed_at,
                )
                for r in invite.redemptions
            ],
        )


class GetInviteLinksRequest(BaseModel):
    """Get invite links request."""

    caller_id: str


class GetInviteLinksResponse(CamelModel):
    """Both invite links of the caller's team."""

    links: list[InviteLinkItem]


class GetInviteLinksUseCase(BaseUseCase):
    """Use case for a PRO reading (and lazily creating) their invite links."""

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

    async def execute(self, request: GetInviteLinksRequest) -> GetInviteLinksResponse:
        """Return the STAFF and ATHLETE links, creating missing ones.

        Raises:
            ForbiddenError: If the caller is not a PRO
            InvalidStateError: If the PRO is not active
        """
        with logfire.span("get_invite_links", caller_id=request.caller_id):
            pair = await self.invite_lifecycle_service.get_or_create_persistent_pair(
                AccountId(request.caller_id)
            )
            return GetInviteLinksResponse(
                links=[
                    InviteLinkItem.from_issued(issued, self.settings)
                    for issued in pair.values()
                ]
            )
