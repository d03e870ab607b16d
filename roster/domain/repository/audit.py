"""Audit log repository interface."""

from abc import ABC, abstractmethod

from roster.domain.model import AuditEntry
from roster.domain.value import AccountId


class AuditLogRepository(ABC):
    """Append-only store of privileged roster actions."""

    @abstractmethod
    async def append(self, entry: AuditEntry) -> AuditEntry:
        """Record an entry."""
        pass

    @abstractmethod
    async def find_by_pro(
        self, pro_id: AccountId, limit: int = 50
    ) -> list[AuditEntry]:
        """Find the most recent entries for a PRO's team, newest first."""
        pass
