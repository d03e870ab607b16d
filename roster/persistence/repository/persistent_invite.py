"""PostgreSQL implementation of PersistentInvite repository."""

from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roster.domain.error import ConflictError
from roster.domain.model import PersistentInvite
from roster.domain.repository import PersistentInviteRepository
from roster.domain.value import AccountId, Role, TokenDigest
from roster.persistence.mappers import (
    persistent_invite_to_dict,
    row_to_persistent_invite,
)
from roster.persistence.tables import persistent_invites_table


class PostgresPersistentInviteRepository(PersistentInviteRepository):
    """PostgreSQL implementation of PersistentInviteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_digest(self, digest: TokenDigest) -> Optional[PersistentInvite]:
        """Find the invite whose current digest matches."""
        stmt = select(persistent_invites_table).where(
            persistent_invites_table.c.token_digest == digest.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_persistent_invite(dict(row)) if row else None

    async def find_by_pro_and_role(
        self, pro_id: AccountId, role: Role
    ) -> Optional[PersistentInvite]:
        """Find the invite for one role of a PRO's team."""
        stmt = select(persistent_invites_table).where(
            and_(
                persistent_invites_table.c.pro_id == pro_id,
                persistent_invites_table.c.role == role.value,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_persistent_invite(dict(row)) if row else None

    async def find_by_pro(self, pro_id: AccountId) -> list[PersistentInvite]:
        """Find every invite of a PRO's team."""
        stmt = (
            select(persistent_invites_table)
            .where(persistent_invites_table.c.pro_id == pro_id)
            .order_by(persistent_invites_table.c.role)
        )
        result = await self.session.execute(stmt)
        return [row_to_persistent_invite(dict(row)) for row in result.mappings()]

    async def save(self, invite: PersistentInvite) -> PersistentInvite:
        """Save an invite (create or update).

        Raises:
            ConflictError: If the (pro_id, role) pair or the digest is taken
        """
        version = invite.version + 1
        invite_dict = {**persistent_invite_to_dict(invite), "version": version}

        if invite.version:
            stmt = (
                update(persistent_invites_table)
                .where(persistent_invites_table.c.id == invite.id)
                .values(**invite_dict)
            )
        else:
            stmt = insert(persistent_invites_table).values(**invite_dict)

        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            raise ConflictError(f"Invite link could not be stored: {e.orig}")
        return invite.model_copy(update={"version": version})
