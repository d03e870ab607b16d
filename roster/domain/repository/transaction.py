"""Optimistic multi-document transactions.

A unit of work receives a TransactionScope, reads the documents it needs
through it and stages the documents it wants to write with put(). On commit
the runner checks that every document the unit read still has the version it
observed, then writes each staged document with version + 1. A stale read or
a unique-key collision aborts the attempt with ConflictError and the whole
unit of work is run again, up to max_attempts times.

Units of work must therefore be free of side effects outside the scope:
anything that talks to the identity provider happens after run() returns.
Documents a unit of work returns still carry the version they were read with.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TypeVar

import logfire

from roster.domain.error import ConflictError
from roster.domain.model import (
    Account,
    Document,
    EphemeralInvite,
    PersistentInvite,
    Team,
)
from roster.domain.value import AccountId, Role, TokenDigest

T = TypeVar("T")

DocumentKey = tuple[str, str]


def document_key(document: Document) -> DocumentKey:
    """Identity of a versioned document across reads and writes."""
    if isinstance(document, Account):
        return ("account", str(document.id))
    if isinstance(document, EphemeralInvite):
        return ("ephemeral_invite", str(document.id))
    if isinstance(document, PersistentInvite):
        return ("persistent_invite", str(document.id))
    if isinstance(document, Team):
        return ("team", str(document.pro_id))
    raise TypeError(f"Not a versioned document: {type(document).__name__}")


class TransactionScope(ABC):
    """Snapshot view handed to a unit of work.

    Reads are tracked by version; writes are staged and only applied when the
    runner commits. A document read after it was staged is returned as staged.
    """

    def __init__(self) -> None:
        self.reads: dict[DocumentKey, Document] = {}
        self.writes: dict[DocumentKey, Document] = {}

    async def get_account(self, account_id: AccountId) -> Account | None:
        staged = self.writes.get(("account", str(account_id)))
        if staged is not None:
            return staged  # type: ignore[return-value]
        return self._track(await self._load_account(account_id))

    async def get_ephemeral_invite(
        self, digest: TokenDigest
    ) -> EphemeralInvite | None:
        for staged in self.writes.values():
            if isinstance(staged, EphemeralInvite) and staged.token_digest == digest:
                return staged
        return self._track(await self._load_ephemeral_invite(digest))

    async def get_persistent_invite(
        self, digest: TokenDigest
    ) -> PersistentInvite | None:
        for staged in self.writes.values():
            if isinstance(staged, PersistentInvite) and staged.token_digest == digest:
                return staged
        return self._track(await self._load_persistent_invite(digest))

    async def get_persistent_invite_for(
        self, pro_id: AccountId, role: Role
    ) -> PersistentInvite | None:
        for staged in self.writes.values():
            if (
                isinstance(staged, PersistentInvite)
                and staged.pro_id == pro_id
                and staged.role == role
            ):
                return staged
        return self._track(await self._load_persistent_invite_for(pro_id, role))

    async def get_team(self, pro_id: AccountId) -> Team | None:
        staged = self.writes.get(("team", str(pro_id)))
        if staged is not None:
            return staged  # type: ignore[return-value]
        return self._track(await self._load_team(pro_id))

    def put(self, document: Document) -> None:
        """Stage a document for writing at commit.

        The document must carry the version it was read with (0 when new).
        """
        key = document_key(document)
        read = self.reads.get(key)
        if read is not None and read.version != document.version:
            raise ConflictError(f"Staged {key[0]} does not match the version read")
        self.writes[key] = document

    def _track(self, document):
        if document is not None:
            self.reads.setdefault(document_key(document), document)
        return document

    @abstractmethod
    async def _load_account(self, account_id: AccountId) -> Account | None:
        pass

    @abstractmethod
    async def _load_ephemeral_invite(
        self, digest: TokenDigest
    ) -> EphemeralInvite | None:
        pass

    @abstractmethod
    async def _load_persistent_invite(
        self, digest: TokenDigest
    ) -> PersistentInvite | None:
        pass

    @abstractmethod
    async def _load_persistent_invite_for(
        self, pro_id: AccountId, role: Role
    ) -> PersistentInvite | None:
        pass

    @abstractmethod
    async def _load_team(self, pro_id: AccountId) -> Team | None:
        pass


class TransactionRunner(ABC):
    """Runs units of work atomically, retrying on conflict."""

    def __init__(self, max_attempts: int = 5) -> None:
        """Initialize runner.

        Args:
            max_attempts: Attempts before ConflictError reaches the caller
        """
        self.max_attempts = max(1, max_attempts)

    async def run(
        self,
        work: Callable[[TransactionScope], Awaitable[T]],
        name: str = "transaction",
    ) -> T:
        """Run work until it commits.

        Domain errors raised by work abort the transaction without retry.

        Args:
            work: Unit of work; may be invoked more than once
            name: Label for logs and spans

        Returns:
            Whatever work returned on the attempt that committed

        Raises:
            ConflictError: If every attempt lost a race
        """
        with logfire.span("transaction.run", name=name):
            for attempt in range(1, self.max_attempts + 1):
                try:
                    return await self._attempt(work)
                except ConflictError as e:
                    if attempt == self.max_attempts:
                        logfire.error(
                            "Transaction gave up after conflicts",
                            name=name,
                            attempts=attempt,
                            error=str(e),
                        )
                        raise
                    logfire.warn(
                        "Transaction conflict, retrying",
                        name=name,
                        attempt=attempt,
                        error=str(e),
                    )
            raise ConflictError()  # unreachable; keeps type checkers quiet

    @abstractmethod
    async def _attempt(self, work: Callable[[TransactionScope], Awaitable[T]]) -> T:
        """Run work once against a fresh scope and commit it."""
        pass
