"""PostgreSQL implementation of Account repository."""

from typing import Optional

from sqlalchemy import and_, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from roster.domain.model import Account
from roster.domain.repository import AccountRepository
from roster.domain.value import AccountId, MembershipStatus, ProStatus, Role
from roster.persistence.mappers import account_to_dict, row_to_account
from roster.persistence.tables import accounts_table


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID."""
        stmt = select(accounts_table).where(accounts_table.c.id == account_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[Account]:
        """Find an account by email, ignoring case."""
        stmt = select(accounts_table).where(
            func.lower(accounts_table.c.email) == email.lower()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    def _team_filter(self, pro_id: AccountId, role: Role | None):
        conditions = [
            accounts_table.c.pro_id == pro_id,
            accounts_table.c.status == MembershipStatus.ACTIVE.value,
        ]
        if role is not None:
            conditions.append(accounts_table.c.role == role.value)
        else:
            conditions.append(
                accounts_table.c.role.in_([Role.STAFF.value, Role.ATHLETE.value])
            )
        return and_(*conditions)

    async def find_team_members(
        self, pro_id: AccountId, role: Role | None = None
    ) -> list[Account]:
        """Find active members of a PRO's team, oldest first."""
        stmt = (
            select(accounts_table)
            .where(self._team_filter(pro_id, role))
            .order_by(accounts_table.c.joined_at.asc().nulls_last())
        )
        result = await self.session.execute(stmt)
        return [row_to_account(dict(row)) for row in result.mappings()]

    async def count_team_members(self, pro_id: AccountId, role: Role) -> int:
        """Count active members of a PRO's team with a role."""
        stmt = (
            select(func.count())
            .select_from(accounts_table)
            .where(self._team_filter(pro_id, role))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_active_pros(self) -> list[Account]:
        """Find every PRO account with an active subscription."""
        stmt = select(accounts_table).where(
            and_(
                accounts_table.c.role == Role.PRO.value,
                accounts_table.c.pro_status == ProStatus.ACTIVE.value,
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_account(dict(row)) for row in result.mappings()]

    async def save(self, account: Account) -> Account:
        """Save an account (create or update), bumping its version."""
        existing = await self.find_by_id(account.id)
        version = existing.version + 1 if existing else 1
        account_dict = {**account_to_dict(account), "version": version}

        if existing:
            stmt = (
                update(accounts_table)
                .where(accounts_table.c.id == account.id)
                .values(**account_dict)
            )
        else:
            stmt = insert(accounts_table).values(**account_dict)
        await self.session.execute(stmt)
        await self.session.flush()
        return account.model_copy(update={"version": version})
