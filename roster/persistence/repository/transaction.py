"""PostgreSQL implementation of optimistic transactions.

Each attempt runs in its own session and database transaction. Staged
documents are written with a conditional UPDATE on the version they were read
with, or an INSERT when new; documents that were only read are re-checked
under a shared row lock so that a concurrent writer invalidates the attempt.
"""

from collections.abc import Awaitable, Callable
from typing import TypeVar

import logfire
from sqlalchemy import Table, and_, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from roster.domain.error import ConflictError, UpstreamFailureError
from roster.domain.model import (
    Account,
    Document,
    EphemeralInvite,
    PersistentInvite,
    Team,
)
from roster.domain.repository import TransactionRunner, TransactionScope
from roster.domain.value import AccountId, Role, TokenDigest
from roster.persistence.mappers import (
    account_to_dict,
    ephemeral_invite_to_dict,
    persistent_invite_to_dict,
    team_to_dict,
)
from roster.persistence.tables import (
    accounts_table,
    ephemeral_invites_table,
    persistent_invites_table,
    teams_table,
)

from .account import PostgresAccountRepository
from .ephemeral_invite import PostgresEphemeralInviteRepository
from .persistent_invite import PostgresPersistentInviteRepository
from .team import PostgresTeamRepository

T = TypeVar("T")


def _row_spec(document: Document) -> tuple[Table, object, dict]:
    """Table, primary key value and column values of a document."""
    if isinstance(document, Account):
        return accounts_table, document.id, account_to_dict(document)
    if isinstance(document, EphemeralInvite):
        return (
            ephemeral_invites_table,
            document.id,
            ephemeral_invite_to_dict(document),
        )
    if isinstance(document, PersistentInvite):
        return (
            persistent_invites_table,
            document.id,
            persistent_invite_to_dict(document),
        )
    if isinstance(document, Team):
        return teams_table, document.pro_id, team_to_dict(document)
    raise TypeError(f"Not a versioned document: {type(document).__name__}")


def _primary_key(table: Table):
    return list(table.primary_key.columns)[0]


class PostgresTransactionScope(TransactionScope):
    """Transaction scope reading through one database session."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__()
        self.session = session
        self.accounts = PostgresAccountRepository(session)
        self.ephemeral_invites = PostgresEphemeralInviteRepository(session)
        self.persistent_invites = PostgresPersistentInviteRepository(session)
        self.teams = PostgresTeamRepository(session)

    async def _load_account(self, account_id: AccountId) -> Account | None:
        return await self.accounts.find_by_id(account_id)

    async def _load_ephemeral_invite(
        self, digest: TokenDigest
    ) -> EphemeralInvite | None:
        return await self.ephemeral_invites.find_by_digest(digest)

    async def _load_persistent_invite(
        self, digest: TokenDigest
    ) -> PersistentInvite | None:
        return await self.persistent_invites.find_by_digest(digest)

    async def _load_persistent_invite_for(
        self, pro_id: AccountId, role: Role
    ) -> PersistentInvite | None:
        return await self.persistent_invites.find_by_pro_and_role(pro_id, role)

    async def _load_team(self, pro_id: AccountId) -> Team | None:
        return await self.teams.find_by_pro(pro_id)

    async def commit(self) -> None:
        """Validate reads and apply staged writes.

        Raises:
            ConflictError: If a document changed since it was read or a
                unique key is already taken
        """
        for key, document in self.reads.items():
            if key not in self.writes:
                await self._check_version(document)
        for document in self.writes.values():
            await self._write(document)
        await self.session.flush()

    async def _check_version(self, document: Document) -> None:
        table, pk_value, _ = _row_spec(document)
        stmt = (
            select(table.c.version)
            .where(_primary_key(table) == pk_value)
            .with_for_update(read=True)
        )
        result = await self.session.execute(stmt)
        current = result.scalar_one_or_none()
        if current != document.version:
            raise ConflictError(f"{table.name} {pk_value} changed during transaction")

    async def _write(self, document: Document) -> None:
        table, pk_value, values = _row_spec(document)
        values["version"] = document.version + 1

        if document.version == 0:
            await self.session.execute(insert(table).values(**values))
            return

        stmt = (
            update(table)
            .where(
                and_(
                    _primary_key(table) == pk_value,
                    table.c.version == document.version,
                )
            )
            .values(**values)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            raise ConflictError(f"{table.name} {pk_value} changed during transaction")


class PostgresTransactionRunner(TransactionRunner):
    """Transaction runner opening a fresh session for every attempt."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        max_attempts: int = 5,
    ) -> None:
        """Initialize runner.

        Args:
            session_factory: Factory for database sessions
            max_attempts: Attempts before ConflictError reaches the caller
        """
        super().__init__(max_attempts)
        self.session_factory = session_factory

    async def _attempt(self, work: Callable[[TransactionScope], Awaitable[T]]) -> T:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    scope = PostgresTransactionScope(session)
                    result = await work(scope)
                    await scope.commit()
                    return result
        except IntegrityError as e:
            raise ConflictError(f"Unique constraint violated: {e.orig}")
        except (SQLAlchemyError, TimeoutError) as e:
            logfire.error("Database transaction failed", error=str(e))
            raise UpstreamFailureError(f"Database unavailable: {e}")
