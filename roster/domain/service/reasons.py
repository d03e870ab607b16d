"""Reason strings reported to callers.

Invalid-state and not-found failures are reported verbatim, so every reason
a caller can see is defined here.
"""

from roster.domain.value import Role

INVITE_NOT_FOUND = "Invite not found"
INVITE_ALREADY_CLAIMED = "Invite has already been claimed"
INVITE_EXPIRED = "Invite has expired"

INVALID_INVITE_LINK = "Invalid invite link"
INVITE_LINK_DEACTIVATED = "This invite link has been deactivated"

PRO_NOT_ACTIVE = "PRO account is not active"
PRO_NO_LONGER_ACTIVE = "PRO account is no longer active"
PRO_ALREADY_ACTIVE = "PRO account is already active"
PRO_CANNOT_JOIN = "PRO accounts cannot join a team"
ONLY_PRO = "Only PRO accounts can manage the team"

ALREADY_JOINED = "User already joined this team"
CANNOT_REMOVE_SELF = "Cannot remove yourself from the team"
NOT_A_MEMBER = "Member does not belong to your team"

ACCOUNT_EXISTS = "Account already exists"
FREE_ACCESS_UNAVAILABLE = "Free access is not available"
FREE_ACCESS_INVALID_CODE = "Invalid free access code"
FREE_ACCESS_ALREADY_USED = "Free access has already been used"
PAYMENT_REFERENCE_REQUIRED = "Payment reference is required"

ACCOUNT_HAS_DOCUMENT = "Account still has a roster document"


def seat_limit_reached(role: Role) -> str:
    return f"{role.value} seat limit reached"


def invite_limit_reached(role: Role) -> str:
    return f"{role.value} invite limit reached"


def invalid_role(role: Role | str) -> str:
    value = role.value if isinstance(role, Role) else role
    return f"Invites cannot be issued for role {value}"
