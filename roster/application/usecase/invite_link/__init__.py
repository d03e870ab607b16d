"""Invite link use cases."""

from roster.application.usecase.invite_link.get_invite_links import (
    GetInviteLinksRequest,
    GetInviteLinksResponse,
    GetInviteLinksUseCase,
    InviteLinkItem,
)
from roster.application.usecase.invite_link.redeem_invite_link import (
    RedeemInviteLinkRequest,
    RedeemInviteLinkUseCase,
)
from roster.application.usecase.invite_link.regenerate_invite_link import (
    RegenerateInviteLinkRequest,
    RegenerateInviteLinkUseCase,
)
from roster.application.usecase.invite_link.set_invite_link_status import (
    SetInviteLinkStatusRequest,
    SetInviteLinkStatusUseCase,
)
from roster.application.usecase.invite_link.validate_invite_link import (
    ValidateInviteLinkRequest,
    ValidateInviteLinkResponse,
    ValidateInviteLinkUseCase,
)

__all__ = [
    "GetInviteLinksRequest",
    "GetInviteLinksResponse",
    "GetInviteLinksUseCase",
    "InviteLinkItem",
    "RedeemInviteLinkRequest",
    "RedeemInviteLinkUseCase",
    "RegenerateInviteLinkRequest",
    "RegenerateInviteLinkUseCase",
    "SetInviteLinkStatusRequest",
    "SetInviteLinkStatusUseCase",
    "ValidateInviteLinkRequest",
    "ValidateInviteLinkResponse",
    "ValidateInviteLinkUseCase",
]
