"""In-memory audit log repository for testing."""

from roster.domain.model import AuditEntry
from roster.domain.repository import AuditLogRepository
from roster.domain.value import AccountId

from .store import InMemoryStore


class InMemoryAuditLogRepository(AuditLogRepository):
    """In-memory implementation of AuditLogRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def append(self, entry: AuditEntry) -> AuditEntry:
        """Record an entry."""
        self.store.audit_entries.append(entry)
        return entry

    async def find_by_pro(
        self, pro_id: AccountId, limit: int = 50
    ) -> list[AuditEntry]:
        """Find the most recent entries for a PRO's team."""
        entries = [e for e in self.store.audit_entries if e.pro_id == pro_id]
        entries.sort(key=lambda e: e.created_at, reverse=True)
        return entries[:limit]
