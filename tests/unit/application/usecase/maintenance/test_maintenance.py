"""Unit tests for the maintenance use cases."""

import pytest

from roster.application.usecase.maintenance import (
    ReconcileSeatsRequest,
    ReconcileSeatsUseCase,
    SweepExpiredInvitesRequest,
    SweepExpiredInvitesUseCase,
)
from roster.domain.model import Team
from roster.domain.repository import TeamRepository
from roster.domain.service import InviteLifecycleService
from roster.domain.value import AccountId, Role
from roster.util.clock import Clock
from tests.conftest import make_member, make_pro
from tests.di import FrozenClock
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestReconcileSeatsUseCase:
    """Tests for ReconcileSeatsUseCase."""

    @pytest.mark.asyncio
    async def test_reports_only_drifted_teams(self, unit_env):
        # Arrange
        team_repo = await unit_env.get(TeamRepository)
        await make_pro(unit_env, "pro-1")
        await make_pro(unit_env, "pro-2")
        await make_member(unit_env, "athlete-1", "pro-1")
        await team_repo.save(Team(pro_id=AccountId("pro-1"), staff_count=3))
        await team_repo.save(Team(pro_id=AccountId("pro-2")))
        use_case = await unit_env.get(ReconcileSeatsUseCase)

        # Act
        response = await use_case.execute(ReconcileSeatsRequest())

        # Assert
        assert response.checked == 2
        assert len(response.changed) == 1
        corrected = response.changed[0]
        assert corrected.pro_id == "pro-1"
        assert corrected.staff_before == 3
        assert corrected.staff_after == 0
        assert corrected.athlete_after == 1


class TestSweepExpiredInvitesUseCase:
    """Tests for SweepExpiredInvitesUseCase."""

    @pytest.mark.asyncio
    async def test_deletes_expired_invites(self, unit_env):
        # Arrange
        await make_pro(unit_env)
        lifecycle = await unit_env.get(InviteLifecycleService)
        clock: FrozenClock = await unit_env.get(Clock)
        await lifecycle.create_ephemeral(AccountId("pro-1"), Role.ATHLETE)
        clock.advance(minutes=61)
        await lifecycle.create_ephemeral(AccountId("pro-1"), Role.STAFF)
        use_case = await unit_env.get(SweepExpiredInvitesUseCase)

        # Act
        response = await use_case.execute(SweepExpiredInvitesRequest())

        # Assert
        assert response.deleted == 1
