"""Ephemeral invite repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from roster.domain.model import EphemeralInvite
from roster.domain.value import AccountId, TokenDigest


class EphemeralInviteRepository(ABC):
    """Repository for single-use invites, addressed by token digest."""

    @abstractmethod
    async def find_by_digest(self, digest: TokenDigest) -> EphemeralInvite | None:
        """Find an invite by the digest of its secret.

        Args:
            digest: SHA-256 digest of the presented secret

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_pro(self, pro_id: AccountId) -> list[EphemeralInvite]:
        """Find invites issued by a PRO, newest first."""
        pass

    @abstractmethod
    async def save(self, invite: EphemeralInvite) -> EphemeralInvite:
        """Save an invite (create or update).

        Raises:
            ConflictError: If another invite already has the same digest
        """
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete invites whose expires_at is at or before now.

        Returns:
            Number of deleted invites
        """
        pass
