"""PostgreSQL implementation of AuditLog repository."""

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from roster.domain.model import AuditEntry
from roster.domain.repository import AuditLogRepository
from roster.domain.value import AccountId
from roster.persistence.mappers import audit_entry_to_dict, row_to_audit_entry
from roster.persistence.tables import audit_logs_table


class PostgresAuditLogRepository(AuditLogRepository):
    """PostgreSQL implementation of AuditLogRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def append(self, entry: AuditEntry) -> AuditEntry:
        """Record an entry."""
        stmt = insert(audit_logs_table).values(**audit_entry_to_dict(entry))
        await self.session.execute(stmt)
        await self.session.flush()
        return entry

    async def find_by_pro(
        self, pro_id: AccountId, limit: int = 50
    ) -> list[AuditEntry]:
        """Find the most recent entries for a PRO's team."""
        stmt = (
            select(audit_logs_table)
            .where(audit_logs_table.c.pro_id == pro_id)
            .order_by(audit_logs_table.c.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_audit_entry(dict(row)) for row in result.mappings()]
