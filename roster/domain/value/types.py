"""Domain value objects for the roster.

Value objects are immutable and defined by their values, not identity.
Enum values are the literal strings used on the wire.
"""

import re
from enum import Enum

from pydantic import ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from roster.domain.value.common import RootValueObject, ValueObject
from roster.domain.value.identifiers import AccountId


class Role(str, Enum):
    """Account role."""

    PRO = "PRO"
    STAFF = "STAFF"
    ATHLETE = "ATHLETE"

    @property
    def is_member_role(self) -> bool:
        """Whether invites can be issued for this role."""
        return self in (Role.STAFF, Role.ATHLETE)


class ProStatus(str, Enum):
    """Subscription status of a PRO account."""

    INACTIVE = "inactive"
    ACTIVE = "active"


class MembershipStatus(str, Enum):
    """Team membership status. Removal flips a member to inactive."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class InviteKind(str, Enum):
    """Tag of the invite union."""

    EPHEMERAL = "ephemeral"
    PERSISTENT = "persistent"


class ActivationMethod(str, Enum):
    """How a PRO account was activated."""

    FREE_ACCESS = "free_access"
    PAYMENT = "payment"


class PaymentKind(str, Enum):
    """Kind of completed payment reported by the payment processor."""

    PRO_UPGRADE = "pro_upgrade"
    TRAINING_SESSION = "training_session"
    TRAINING_PACKAGE = "training_package"


class AuditAction(str, Enum):
    """Audited roster actions."""

    REMOVE_TEAM_MEMBER = "remove_team_member"
    CLEANUP_ORPHANED_ACCOUNT = "cleanup_orphaned_account"


class InviteSecret(RootValueObject[str]):
    """Plaintext invite secret.

    Handed to the issuer exactly once and never persisted.
    """

    @field_validator("root")
    @classmethod
    def validate_secret(cls, v: str) -> str:
        """Validate secret is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Invite secret must be 1-255 characters")
        return v


class TokenDigest(RootValueObject[str]):
    """SHA-256 hex digest of an invite secret."""

    @field_validator("root")
    @classmethod
    def validate_digest(cls, v: str) -> str:
        """Validate digest is 64 lowercase hex characters."""
        if not re.match(r"^[0-9a-f]{64}$", v):
            raise ValueError("Token digest must be 64 lowercase hex characters")
        return v


class AccountProfile(ValueObject):
    """Profile fields supplied by someone joining a team."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    email: str | None = None
    display_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None


class AccountClaims(ValueObject):
    """Role and team claims mirrored into the identity provider."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    role: Role | None = None
    pro_id: AccountId | None = None
    pro_status: ProStatus = ProStatus.INACTIVE

    def as_payload(self) -> dict[str, str | None]:
        """Claim set in the provider's wire format."""
        return self.model_dump(mode="json", by_alias=True)


class PaymentEvent(ValueObject):
    """Completed payment reported by the payment processor.

    Only PRO upgrades change roster state; the other kinds are acknowledged
    and ignored.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    account_id: AccountId
    payment_kind: PaymentKind
    role: Role | None = None
    pro_id: AccountId | None = None

    @property
    def grants_pro(self) -> bool:
        return self.payment_kind == PaymentKind.PRO_UPGRADE
