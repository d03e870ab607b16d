"""Account repository interface."""

from abc import ABC, abstractmethod

from roster.domain.model import Account
from roster.domain.value import AccountId, Role


class AccountRepository(ABC):
    """Repository for Account aggregate.

    Queries only read committed state. Writes that must be atomic with other
    documents go through a TransactionRunner instead of save().
    """

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> Account | None:
        """Find an account by its identity provider uid.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Account | None:
        """Find an account by email (case-insensitive).

        Used by orphan cleanup to decide whether an identity has a document.

        Args:
            email: Email address

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_team_members(
        self, pro_id: AccountId, role: Role | None = None
    ) -> list[Account]:
        """Find active STAFF/ATHLETE accounts on a PRO's team.

        Args:
            pro_id: Owning PRO account ID
            role: Optional role filter

        Returns:
            Members ordered by joined_at
        """
        pass

    @abstractmethod
    async def count_team_members(self, pro_id: AccountId, role: Role) -> int:
        """Count active accounts with the given pro_id and role.

        This is the live count that team counters are reconciled against.
        """
        pass

    @abstractmethod
    async def find_active_pros(self) -> list[Account]:
        """Find every PRO account with an active subscription."""
        pass

    @abstractmethod
    async def save(self, account: Account) -> Account:
        """Save an account unconditionally (create or update).

        Args:
            account: The account to save

        Returns:
            The saved account with its version bumped
        """
        pass
