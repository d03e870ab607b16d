"""Team seat counters."""

from datetime import datetime

from pydantic import Field

from roster.domain.model.common import VersionedModel, utc_now
from roster.domain.value import AccountId, Role

_COUNTER_FIELDS = {
    Role.STAFF: "staff_count",
    Role.ATHLETE: "athlete_count",
}


class Team(VersionedModel):
    """Per-PRO seat counters.

    The counters are the source of truth for admission decisions. They move
    in the same transaction as the membership write and are periodically
    reconciled against live accounts.
    """

    pro_id: AccountId
    name: str = "My Team"
    staff_count: int = Field(default=0, ge=0)
    athlete_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def count_for(self, role: Role) -> int:
        return getattr(self, self._counter_field(role))

    def with_count(self, role: Role, count: int, now: datetime) -> "Team":
        """Copy of the team with the counter for role set to count."""
        return self.model_copy(
            update={self._counter_field(role): max(0, count), "updated_at": now}
        )

    @staticmethod
    def _counter_field(role: Role) -> str:
        if role not in _COUNTER_FIELDS:
            raise ValueError(f"Teams do not count {role.value} seats")
        return _COUNTER_FIELDS[role]
