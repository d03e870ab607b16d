"""Persistent invite repository interface."""

from abc import ABC, abstractmethod

from roster.domain.model import PersistentInvite
from roster.domain.value import AccountId, Role, TokenDigest


class PersistentInviteRepository(ABC):
    """Repository for reusable invite links.

    There is at most one invite per (pro_id, role); stores enforce this with a
    unique key.
    """

    @abstractmethod
    async def find_by_digest(self, digest: TokenDigest) -> PersistentInvite | None:
        """Find the invite whose current digest matches.

        A regenerated invite no longer matches its previous digest.
        """
        pass

    @abstractmethod
    async def find_by_pro_and_role(
        self, pro_id: AccountId, role: Role
    ) -> PersistentInvite | None:
        """Find the invite for one role of a PRO's team."""
        pass

    @abstractmethod
    async def find_by_pro(self, pro_id: AccountId) -> list[PersistentInvite]:
        """Find every invite of a PRO's team."""
        pass

    @abstractmethod
    async def save(self, invite: PersistentInvite) -> PersistentInvite:
        """Save an invite (create or update).

        Raises:
            ConflictError: If the (pro_id, role) pair or the digest is taken
        """
        pass
