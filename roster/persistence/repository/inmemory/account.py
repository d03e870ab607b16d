"""In-memory account repository for testing."""

from typing import Optional

from roster.domain.model import Account
from roster.domain.repository import AccountRepository
from roster.domain.value import AccountId, MembershipStatus, Role

from .store import InMemoryStore


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID."""
        return self.store.get(("account", str(account_id)))  # type: ignore[return-value]

    async def find_by_email(self, email: str) -> Optional[Account]:
        """Find an account by email, ignoring case."""
        for account in self.store.of_type(Account):
            if account.email and account.email.lower() == email.lower():
                return account
        return None

    async def find_team_members(
        self, pro_id: AccountId, role: Role | None = None
    ) -> list[Account]:
        """Find active members of a PRO's team, oldest first."""
        members = [
            account
            for account in self.store.of_type(Account)
            if account.is_member_of(pro_id)
            and account.role is not None
            and (account.role == role if role else account.role.is_member_role)
        ]
        members.sort(key=lambda a: (a.joined_at is None, a.joined_at or a.created_at))
        return members

    async def count_team_members(self, pro_id: AccountId, role: Role) -> int:
        """Count active members of a PRO's team with a role."""
        return len(await self.find_team_members(pro_id, role))

    async def find_active_pros(self) -> list[Account]:
        """Find every PRO account with an active subscription."""
        return [a for a in self.store.of_type(Account) if a.is_active_pro]

    async def save(self, account: Account) -> Account:
        """Save an account (create or update)."""
        return self.store.store(account)
