"""PostgreSQL implementation of EphemeralInvite repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roster.domain.error import ConflictError
from roster.domain.model import EphemeralInvite
from roster.domain.repository import EphemeralInviteRepository
from roster.domain.value import AccountId, TokenDigest
from roster.persistence.mappers import ephemeral_invite_to_dict, row_to_ephemeral_invite
from roster.persistence.tables import ephemeral_invites_table


class PostgresEphemeralInviteRepository(EphemeralInviteRepository):
    """PostgreSQL implementation of EphemeralInviteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_digest(self, digest: TokenDigest) -> Optional[EphemeralInvite]:
        """Find an invite by the digest of its secret."""
        stmt = select(ephemeral_invites_table).where(
            ephemeral_invites_table.c.token_digest == digest.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_ephemeral_invite(dict(row)) if row else None

    async def find_by_pro(self, pro_id: AccountId) -> list[EphemeralInvite]:
        """Find invites issued by a PRO, newest first."""
        stmt = (
            select(ephemeral_invites_table)
            .where(ephemeral_invites_table.c.pro_id == pro_id)
            .order_by(ephemeral_invites_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_ephemeral_invite(dict(row)) for row in result.mappings()]

    async def save(self, invite: EphemeralInvite) -> EphemeralInvite:
        """Save an invite (create or update).

        Raises:
            ConflictError: If the digest is already in use
        """
        version = invite.version + 1
        invite_dict = {**ephemeral_invite_to_dict(invite), "version": version}

        if invite.version:
            stmt = (
                update(ephemeral_invites_table)
                .where(ephemeral_invites_table.c.id == invite.id)
                .values(**invite_dict)
            )
        else:
            stmt = insert(ephemeral_invites_table).values(**invite_dict)

        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            raise ConflictError(f"Invite could not be stored: {e.orig}")
        return invite.model_copy(update={"version": version})

    async def delete_expired(self, now: datetime) -> int:
        """Delete invites past their expiry."""
        stmt = delete(ephemeral_invites_table).where(
            ephemeral_invites_table.c.expires_at <= now
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
