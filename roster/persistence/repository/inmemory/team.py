"""In-memory team repository for testing."""

from typing import Optional

from roster.domain.model import Team
from roster.domain.repository import TeamRepository
from roster.domain.value import AccountId

from .store import InMemoryStore


class InMemoryTeamRepository(TeamRepository):
    """In-memory implementation of TeamRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_pro(self, pro_id: AccountId) -> Optional[Team]:
        """Find the team owned by a PRO account."""
        return self.store.get(("team", str(pro_id)))  # type: ignore[return-value]

    async def save(self, team: Team) -> Team:
        """Save a team (create or update)."""
        return self.store.store(team)
