"""In-memory optimistic transactions for testing.

Units of work read straight from the store; validation and writes happen
together under the store lock, so a unit of work that interleaves with
another writer fails its version check exactly as it would against the
database.
"""

from collections.abc import Awaitable, Callable
from typing import TypeVar

from roster.domain.error import ConflictError
from roster.domain.model import Account, EphemeralInvite, PersistentInvite, Team
from roster.domain.repository import TransactionRunner, TransactionScope
from roster.domain.value import AccountId, Role, TokenDigest

from .ephemeral_invite import InMemoryEphemeralInviteRepository
from .persistent_invite import InMemoryPersistentInviteRepository
from .store import InMemoryStore

T = TypeVar("T")


class InMemoryTransactionScope(TransactionScope):
    """Transaction scope reading from an InMemoryStore."""

    def __init__(self, store: InMemoryStore) -> None:
        super().__init__()
        self.store = store

    async def _load_account(self, account_id: AccountId) -> Account | None:
        return self.store.get(("account", str(account_id)))  # type: ignore[return-value]

    async def _load_ephemeral_invite(
        self, digest: TokenDigest
    ) -> EphemeralInvite | None:
        return await InMemoryEphemeralInviteRepository(self.store).find_by_digest(
            digest
        )

    async def _load_persistent_invite(
        self, digest: TokenDigest
    ) -> PersistentInvite | None:
        return await InMemoryPersistentInviteRepository(self.store).find_by_digest(
            digest
        )

    async def _load_persistent_invite_for(
        self, pro_id: AccountId, role: Role
    ) -> PersistentInvite | None:
        repository = InMemoryPersistentInviteRepository(self.store)
        return await repository.find_by_pro_and_role(pro_id, role)

    async def _load_team(self, pro_id: AccountId) -> Team | None:
        return self.store.get(("team", str(pro_id)))  # type: ignore[return-value]

    async def commit(self) -> None:
        """Validate reads and apply staged writes atomically.

        Raises:
            ConflictError: If a document changed since it was read or a
                unique key is already taken
        """
        async with self.store.lock:
            for key, document in {**self.reads, **self.writes}.items():
                current = self.store.get(key)
                current_version = current.version if current else 0
                if current_version != document.version:
                    raise ConflictError(f"{key[0]} {key[1]} changed during transaction")
            for document in self.writes.values():
                self.store.check_unique(document)
            for document in self.writes.values():
                self.store.store(document)


class InMemoryTransactionRunner(TransactionRunner):
    """Transaction runner over an InMemoryStore."""

    def __init__(self, store: InMemoryStore, max_attempts: int = 5) -> None:
        super().__init__(max_attempts)
        self.store = store

    async def _attempt(self, work: Callable[[TransactionScope], Awaitable[T]]) -> T:
        scope = InMemoryTransactionScope(self.store)
        result = await work(scope)
        await scope.commit()
        return result
