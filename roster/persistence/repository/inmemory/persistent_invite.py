"""In-memory persistent invite repository for testing."""

from typing import Optional

from roster.domain.model import PersistentInvite
from roster.domain.repository import PersistentInviteRepository
from roster.domain.value import AccountId, Role, TokenDigest

from .store import InMemoryStore


class InMemoryPersistentInviteRepository(PersistentInviteRepository):
    """In-memory implementation of PersistentInviteRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_digest(self, digest: TokenDigest) -> Optional[PersistentInvite]:
        """Find the invite whose current digest matches."""
        for invite in self.store.of_type(PersistentInvite):
            if invite.token_digest == digest:
                return invite
        return None

    async def find_by_pro_and_role(
        self, pro_id: AccountId, role: Role
    ) -> Optional[PersistentInvite]:
        """Find the invite for one role of a PRO's team."""
        for invite in self.store.of_type(PersistentInvite):
            if invite.pro_id == pro_id and invite.role == role:
                return invite
        return None

    async def find_by_pro(self, pro_id: AccountId) -> list[PersistentInvite]:
        """Find every invite of a PRO's team."""
        invites = [
            i for i in self.store.of_type(PersistentInvite) if i.pro_id == pro_id
        ]
        invites.sort(key=lambda i: i.role.value)
        return invites

    async def save(self, invite: PersistentInvite) -> PersistentInvite:
        """Save an invite (create or update).

        Raises:
            ConflictError: If the (pro_id, role) pair or the digest is taken
        """
        self.store.check_unique(invite)
        return self.store.store(invite)
