"""Team repository interface."""

from abc import ABC, abstractmethod

from roster.domain.model import Team
from roster.domain.value import AccountId


class TeamRepository(ABC):
    """Repository for per-PRO seat counters."""

    @abstractmethod
    async def find_by_pro(self, pro_id: AccountId) -> Team | None:
        """Find the team owned by a PRO account."""
        pass

    @abstractmethod
    async def save(self, team: Team) -> Team:
        """Save a team unconditionally (create or update)."""
        pass
