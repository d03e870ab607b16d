"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository
from .audit import InMemoryAuditLogRepository
from .ephemeral_invite import InMemoryEphemeralInviteRepository
from .persistent_invite import InMemoryPersistentInviteRepository
from .store import InMemoryStore
from .team import InMemoryTeamRepository
from .transaction import InMemoryTransactionRunner, InMemoryTransactionScope

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryAuditLogRepository",
    "InMemoryEphemeralInviteRepository",
    "InMemoryPersistentInviteRepository",
    "InMemoryStore",
    "InMemoryTeamRepository",
    "InMemoryTransactionRunner",
    "InMemoryTransactionScope",
]
