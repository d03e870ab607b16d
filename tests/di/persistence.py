"""Mock persistence providers for testing."""

from dishka import Scope, provide

from roster.config import InvitationSettings
from roster.domain.repository import (
    AccountRepository,
    AuditLogRepository,
    EphemeralInviteRepository,
    PersistentInviteRepository,
    TeamRepository,
    TransactionRunner,
)
from roster.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryAuditLogRepository,
    InMemoryEphemeralInviteRepository,
    InMemoryPersistentInviteRepository,
    InMemoryStore,
    InMemoryTeamRepository,
    InMemoryTransactionRunner,
)
from roster.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The store is APP-scoped so that documents survive across requests made
    against one container; each test builds its own container.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_store(self) -> InMemoryStore:
        """Provide shared in-memory store."""
        return InMemoryStore()

    @provide(scope=Scope.APP)
    def get_transaction_runner(
        self, store: InMemoryStore, invitation_settings: InvitationSettings
    ) -> TransactionRunner:
        """Provide in-memory transaction runner."""
        return InMemoryTransactionRunner(
            store, invitation_settings.max_transaction_attempts
        )

    @provide(scope=Scope.REQUEST)
    def get_account_repository(self, store: InMemoryStore) -> AccountRepository:
        """Provide in-memory account repository."""
        return InMemoryAccountRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_ephemeral_invite_repository(
        self, store: InMemoryStore
    ) -> EphemeralInviteRepository:
        """Provide in-memory ephemeral invite repository."""
        return InMemoryEphemeralInviteRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_persistent_invite_repository(
        self, store: InMemoryStore
    ) -> PersistentInviteRepository:
        """Provide in-memory persistent invite repository."""
        return InMemoryPersistentInviteRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_team_repository(self, store: InMemoryStore) -> TeamRepository:
        """Provide in-memory team repository."""
        return InMemoryTeamRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_audit_log_repository(self, store: InMemoryStore) -> AuditLogRepository:
        """Provide in-memory audit log repository."""
        return InMemoryAuditLogRepository(store)
