"""PostgreSQL repository implementations."""

from roster.persistence.repository.account import PostgresAccountRepository
from roster.persistence.repository.audit import PostgresAuditLogRepository
from roster.persistence.repository.ephemeral_invite import (
    PostgresEphemeralInviteRepository,
)
from roster.persistence.repository.persistent_invite import (
    PostgresPersistentInviteRepository,
)
from roster.persistence.repository.team import PostgresTeamRepository
from roster.persistence.repository.transaction import (
    PostgresTransactionRunner,
    PostgresTransactionScope,
)

__all__ = [
    "PostgresAccountRepository",
    "PostgresAuditLogRepository",
    "PostgresEphemeralInviteRepository",
    "PostgresPersistentInviteRepository",
    "PostgresTeamRepository",
    "PostgresTransactionRunner",
    "PostgresTransactionScope",
]
