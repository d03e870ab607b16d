"""Invite entities.

Two kinds of invite bring members onto a PRO's team:

- EphemeralInvite: single-use, expires a fixed time after creation
- PersistentInvite: one reusable link per (PRO, role), capped by
  max_redemptions, can be deactivated and regenerated

Only the SHA-256 digest of an invite secret is ever stored. Callers switch on
the kind tag of the Invite union.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from roster.domain.model.common import DomainModel, VersionedModel, utc_now
from roster.domain.value import AccountId, InviteId, InviteKind, Role, TokenDigest


class EphemeralInviteState(str, Enum):
    """Lifecycle state of an ephemeral invite at a point in time."""

    PENDING = "pending"
    CLAIMED = "claimed"
    EXPIRED = "expired"


class EphemeralInvite(VersionedModel):
    """Single-use, expiring invite.

    Business rules:
    - Pending until claimed or until expires_at passes
    - Claimed and Expired are terminal; claimed never goes back to False
    - Expiry is evaluated lazily against the current time
    """

    kind: Literal[InviteKind.EPHEMERAL] = InviteKind.EPHEMERAL
    id: InviteId
    pro_id: AccountId
    role: Role
    email: Optional[str] = None
    token_digest: TokenDigest
    expires_at: datetime
    claimed: bool = False
    claimed_by: Optional[AccountId] = None
    claimed_at: Optional[datetime] = None
    created_by: AccountId
    created_at: datetime = Field(default_factory=utc_now)

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def state(self, now: datetime) -> EphemeralInviteState:
        if self.claimed:
            return EphemeralInviteState.CLAIMED
        if self.is_expired(now):
            return EphemeralInviteState.EXPIRED
        return EphemeralInviteState.PENDING


class Redemption(DomainModel):
    """One entry of a persistent invite's redemption log."""

    account_id: AccountId
    email: Optional[str] = None
    display_name: Optional[str] = None
    redeemed_at: datetime = Field(default_factory=utc_now)


class PersistentInvite(VersionedModel):
    """Reusable, capacity-capped invite link for one role of one PRO.

    Business rules:
    - Exactly one per (pro_id, role), created on first access, never deleted
    - Redeemable only while active and redeemed_count < max_redemptions
    - redeemed_count is cumulative: members leaving do not decrement it
    - Regeneration replaces the digest and resets the count and the log
    """

    kind: Literal[InviteKind.PERSISTENT] = InviteKind.PERSISTENT
    id: InviteId
    pro_id: AccountId
    role: Role
    token_digest: TokenDigest
    max_redemptions: int = Field(ge=0)
    redeemed_count: int = Field(default=0, ge=0)
    active: bool = True
    redemptions: tuple[Redemption, ...] = ()
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def remaining(self) -> int:
        return max(0, self.max_redemptions - self.redeemed_count)

    @property
    def is_exhausted(self) -> bool:
        return self.redeemed_count >= self.max_redemptions


Invite = Annotated[
    Union[EphemeralInvite, PersistentInvite], Field(discriminator="kind")
]
