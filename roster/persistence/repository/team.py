"""PostgreSQL implementation of Team repository."""

from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from roster.domain.model import Team
from roster.domain.repository import TeamRepository
from roster.domain.value import AccountId
from roster.persistence.mappers import row_to_team, team_to_dict
from roster.persistence.tables import teams_table


class PostgresTeamRepository(TeamRepository):
    """PostgreSQL implementation of TeamRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_pro(self, pro_id: AccountId) -> Optional[Team]:
        """Find the team owned by a PRO account."""
        stmt = select(teams_table).where(teams_table.c.pro_id == pro_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_team(dict(row)) if row else None

    async def save(self, team: Team) -> Team:
        """Save a team (create or update), bumping its version."""
        existing = await self.find_by_pro(team.pro_id)
        version = existing.version + 1 if existing else 1
        team_dict = {**team_to_dict(team), "version": version}

        if existing:
            stmt = (
                update(teams_table)
                .where(teams_table.c.pro_id == team.pro_id)
                .values(**team_dict)
            )
        else:
            stmt = insert(teams_table).values(**team_dict)
        await self.session.execute(stmt)
        await self.session.flush()
        return team.model_copy(update={"version": version})
