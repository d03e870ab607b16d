"""In-memory ephemeral invite repository for testing."""

from datetime import datetime
from typing import Optional

from roster.domain.model import EphemeralInvite
from roster.domain.repository import EphemeralInviteRepository
from roster.domain.value import AccountId, TokenDigest

from .store import InMemoryStore


class InMemoryEphemeralInviteRepository(EphemeralInviteRepository):
    """In-memory implementation of EphemeralInviteRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_digest(self, digest: TokenDigest) -> Optional[EphemeralInvite]:
        """Find an invite by the digest of its secret."""
        for invite in self.store.of_type(EphemeralInvite):
            if invite.token_digest == digest:
                return invite
        return None

    async def find_by_pro(self, pro_id: AccountId) -> list[EphemeralInvite]:
        """Find invites issued by a PRO, newest first."""
        invites = [i for i in self.store.of_type(EphemeralInvite) if i.pro_id == pro_id]
        invites.sort(key=lambda i: i.created_at, reverse=True)
        return invites

    async def save(self, invite: EphemeralInvite) -> EphemeralInvite:
        """Save an invite (create or update).

        Raises:
            ConflictError: If the digest is already in use
        """
        self.store.check_unique(invite)
        return self.store.store(invite)

    async def delete_expired(self, now: datetime) -> int:
        """Delete invites past their expiry."""
        expired = [i for i in self.store.of_type(EphemeralInvite) if i.is_expired(now)]
        for invite in expired:
            del self.store.documents[("ephemeral_invite", str(invite.id))]
        return len(expired)
