"""Shared document store behind the in-memory repositories."""

import asyncio
from typing import TypeVar

from roster.domain.error import ConflictError
from roster.domain.model import (
    AuditEntry,
    Document,
    EphemeralInvite,
    PersistentInvite,
)
from roster.domain.repository import DocumentKey, document_key

D = TypeVar("D")


class InMemoryStore:
    """Versioned documents keyed like the transaction layer keys them.

    Repositories and the transaction runner share one store so that writes
    through either are visible to both.
    """

    def __init__(self) -> None:
        self.documents: dict[DocumentKey, Document] = {}
        self.audit_entries: list[AuditEntry] = []
        self.lock = asyncio.Lock()

    def of_type(self, cls: type[D]) -> list[D]:
        return [d for d in self.documents.values() if isinstance(d, cls)]

    def get(self, key: DocumentKey) -> Document | None:
        return self.documents.get(key)

    def check_unique(self, document: Document) -> None:
        """Enforce the unique keys the database enforces.

        Raises:
            ConflictError: If another document holds the same digest, or the
                same (pro_id, role) for a persistent invite
        """
        if isinstance(document, EphemeralInvite):
            for other in self.of_type(EphemeralInvite):
                if other.id == document.id:
                    continue
                if other.token_digest == document.token_digest:
                    raise ConflictError("Invite token already in use")
        if isinstance(document, PersistentInvite):
            for other in self.of_type(PersistentInvite):
                if other.id == document.id:
                    continue
                if other.token_digest == document.token_digest:
                    raise ConflictError("Invite token already in use")
                if other.pro_id == document.pro_id and other.role == document.role:
                    raise ConflictError("Invite link already exists for this role")

    def store(self, document: D) -> D:
        """Write a document with its version bumped past the stored one."""
        key = document_key(document)
        current = self.documents.get(key)
        version = current.version + 1 if current else 1
        stored = document.model_copy(update={"version": version})
        self.documents[key] = stored
        return stored
