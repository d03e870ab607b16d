"""Repository interfaces for the roster domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from roster.domain.repository.account import AccountRepository
from roster.domain.repository.audit import AuditLogRepository
from roster.domain.repository.ephemeral_invite import EphemeralInviteRepository
from roster.domain.repository.persistent_invite import PersistentInviteRepository
from roster.domain.repository.team import TeamRepository
from roster.domain.repository.transaction import (
    DocumentKey,
    TransactionRunner,
    TransactionScope,
    document_key,
)

__all__ = [
    "AccountRepository",
    "AuditLogRepository",
    "DocumentKey",
    "EphemeralInviteRepository",
    "PersistentInviteRepository",
    "TeamRepository",
    "TransactionRunner",
    "TransactionScope",
    "document_key",
]
