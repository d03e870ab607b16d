"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from roster.config import InvitationSettings, Settings
from roster.domain.repository import (
    AccountRepository,
    AuditLogRepository,
    EphemeralInviteRepository,
    PersistentInviteRepository,
    TeamRepository,
    TransactionRunner,
)
from roster.persistence.database import create_engine, create_session_factory
from roster.persistence.repository import (
    PostgresAccountRepository,
    PostgresAuditLogRepository,
    PostgresEphemeralInviteRepository,
    PostgresPersistentInviteRepository,
    PostgresTeamRepository,
    PostgresTransactionRunner,
)
from roster.util.di.base import ProviderBase
from roster.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.APP)
    def get_transaction_runner(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        invitation_settings: InvitationSettings,
    ) -> TransactionRunner:
        """Provide transaction runner.

        Each attempt opens its own session, so the runner is shared.
        """
        return PostgresTransactionRunner(
            session_factory, invitation_settings.max_transaction_attempts
        )

    @provide(scope=Scope.REQUEST)
    def get_account_repository(self, session: AsyncSession) -> AccountRepository:
        """Provide Account repository."""
        return PostgresAccountRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_ephemeral_invite_repository(
        self, session: AsyncSession
    ) -> EphemeralInviteRepository:
        """Provide EphemeralInvite repository."""
        return PostgresEphemeralInviteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_persistent_invite_repository(
        self, session: AsyncSession
    ) -> PersistentInviteRepository:
        """Provide PersistentInvite repository."""
        return PostgresPersistentInviteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_team_repository(self, session: AsyncSession) -> TeamRepository:
        """Provide Team repository."""
        return PostgresTeamRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_audit_log_repository(self, session: AsyncSession) -> AuditLogRepository:
        """Provide AuditLog repository."""
        return PostgresAuditLogRepository(session)
