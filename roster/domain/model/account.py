"""Account aggregate root.

Accounts are keyed by the identity provider's uid. A PRO account owns a team
and its pro_id always points at itself; STAFF and ATHLETE accounts carry the
pro_id of the team they joined.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from roster.domain.model.common import VersionedModel, utc_now
from roster.domain.value import (
    AccountClaims,
    AccountId,
    AccountProfile,
    ActivationMethod,
    InviteId,
    MembershipStatus,
    ProStatus,
    Role,
)


class Account(VersionedModel):
    """Account aggregate root.

    Business rules:
    - A PRO account's pro_id equals its own id (repaired by ConsistencyGuardian)
    - Accounts are never deleted here; removal from a team clears pro_id and
      flips status to inactive
    - mirrored_claims is the last claim set the identity provider accepted
    """

    id: AccountId
    email: Optional[str] = None
    display_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    role: Optional[Role] = None
    pro_id: Optional[AccountId] = None
    pro_status: ProStatus = ProStatus.INACTIVE
    status: MembershipStatus = MembershipStatus.ACTIVE
    joined_via_invite: Optional[InviteId] = None
    joined_at: Optional[datetime] = None
    removed_at: Optional[datetime] = None
    removed_by: Optional[AccountId] = None
    activated_at: Optional[datetime] = None
    activation_method: Optional[ActivationMethod] = None
    free_access_activated_at: Optional[datetime] = None
    mirrored_claims: Optional[AccountClaims] = None
    claims_synced_at: Optional[datetime] = None
    consistency_repaired_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_pro_like(self) -> bool:
        """Whether the account holds PRO status by role or subscription."""
        return self.role == Role.PRO or self.pro_status == ProStatus.ACTIVE

    @property
    def is_active_pro(self) -> bool:
        return self.role == Role.PRO and self.pro_status == ProStatus.ACTIVE

    def is_member_of(self, pro_id: AccountId) -> bool:
        """Whether the account currently sits on the given PRO's team."""
        return (
            self.role != Role.PRO
            and self.pro_id == pro_id
            and self.status == MembershipStatus.ACTIVE
        )

    def desired_claims(self) -> AccountClaims:
        """Claims the identity provider should hold for this account."""
        return AccountClaims(
            role=self.role, pro_id=self.pro_id, pro_status=self.pro_status
        )

    @staticmethod
    def profile_updates(profile: AccountProfile) -> dict:
        """Profile fields to write, skipping ones the joiner left empty."""
        return {k: v for k, v in profile.model_dump().items() if v is not None}
