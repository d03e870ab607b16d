"""Unit tests for TeamService."""

import pytest

from roster.adapter.identity import MockIdentityClient
from roster.domain.error import ForbiddenError, InvalidStateError, NotFoundError
from roster.domain.repository import (
    AccountRepository,
    AuditLogRepository,
    TeamRepository,
)
from roster.domain.service import (
    IdentityProvider,
    InviteLifecycleService,
    TeamService,
)
from roster.domain.value import (
    AccountId,
    AccountProfile,
    AuditAction,
    MembershipStatus,
    Role,
)
from tests.conftest import make_member, make_pro
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

PRO_ID = AccountId("pro-1")


async def _join(env, account_id: str, role: Role = Role.ATHLETE) -> None:
    lifecycle = await env.get(InviteLifecycleService)
    issued = await lifecycle.create_ephemeral(PRO_ID, role)
    await lifecycle.redeem_ephemeral(
        issued.secret.root, AccountId(account_id), AccountProfile()
    )


class TestGetRoster:
    """Tests for get_roster method."""

    @pytest.mark.asyncio
    async def test_roster_lists_members_and_seats(self, unit_env):
        service = await unit_env.get(TeamService)
        await make_pro(unit_env)
        await _join(unit_env, "staff-1", Role.STAFF)
        await _join(unit_env, "athlete-1")
        await _join(unit_env, "athlete-2")

        roster = await service.get_roster(PRO_ID)

        seats = {s.role: (s.count, s.limit) for s in roster.seats}
        assert seats == {Role.STAFF: (1, 5), Role.ATHLETE: (2, 20)}
        assert [m.id for m in roster.members] == ["staff-1", "athlete-1", "athlete-2"]

    @pytest.mark.asyncio
    async def test_members_cannot_view_roster(self, unit_env):
        service = await unit_env.get(TeamService)
        await make_pro(unit_env)
        await make_member(unit_env, "athlete-1", "pro-1")

        with pytest.raises(ForbiddenError):
            await service.get_roster(AccountId("athlete-1"))


class TestRemoveMember:
    """Tests for remove_member method."""

    @pytest.mark.asyncio
    async def test_remove_frees_seat_and_detaches_member(self, unit_env):
        # Arrange
        service = await unit_env.get(TeamService)
        account_repo = await unit_env.get(AccountRepository)
        team_repo = await unit_env.get(TeamRepository)
        audit_repo = await unit_env.get(AuditLogRepository)
        identity: MockIdentityClient = await unit_env.get(IdentityProvider)
        await make_pro(unit_env)
        await _join(unit_env, "athlete-1")

        # Act
        await service.remove_member(PRO_ID, AccountId("athlete-1"))

        # Assert
        member = await account_repo.find_by_id(AccountId("athlete-1"))
        assert member.status == MembershipStatus.INACTIVE
        assert member.pro_id is None
        assert member.removed_by == "pro-1"
        assert (await team_repo.find_by_pro(PRO_ID)).athlete_count == 0
        assert identity.claims[AccountId("athlete-1")].pro_id is None

        entries = await audit_repo.find_by_pro(PRO_ID)
        assert [e.action for e in entries] == [AuditAction.REMOVE_TEAM_MEMBER]
        assert entries[0].subject_id == "athlete-1"

    @pytest.mark.asyncio
    async def test_cannot_remove_self(self, unit_env):
        service = await unit_env.get(TeamService)
        await make_pro(unit_env)

        with pytest.raises(InvalidStateError, match="Cannot remove yourself"):
            await service.remove_member(PRO_ID, PRO_ID)

    @pytest.mark.asyncio
    async def test_cannot_remove_other_teams_member(self, unit_env):
        service = await unit_env.get(TeamService)
        await make_pro(unit_env, "pro-1")
        await make_pro(unit_env, "pro-2")
        await make_member(unit_env, "athlete-1", "pro-2")

        with pytest.raises(ForbiddenError):
            await service.remove_member(PRO_ID, AccountId("athlete-1"))

    @pytest.mark.asyncio
    async def test_remove_unknown_member(self, unit_env):
        service = await unit_env.get(TeamService)
        await make_pro(unit_env)

        with pytest.raises(NotFoundError):
            await service.remove_member(PRO_ID, AccountId("ghost"))


class TestCleanupOrphanedAccount:
    """Tests for cleanup_orphaned_account method."""

    @pytest.mark.asyncio
    async def test_deletes_identity_without_document(self, unit_env):
        service = await unit_env.get(TeamService)
        identity: MockIdentityClient = await unit_env.get(IdentityProvider)
        await make_pro(unit_env)
        identity.add_identity("orphan@example.com", "orphan-1")

        deleted = await service.cleanup_orphaned_account(PRO_ID, "orphan@example.com")

        assert deleted == "orphan-1"
        assert identity.deleted == [AccountId("orphan-1")]

    @pytest.mark.asyncio
    async def test_refuses_when_account_document_exists(self, unit_env):
        service = await unit_env.get(TeamService)
        identity: MockIdentityClient = await unit_env.get(IdentityProvider)
        await make_pro(unit_env)
        await make_member(unit_env, "athlete-1", "pro-1")
        identity.add_identity("athlete-1@example.com", "athlete-1")

        with pytest.raises(InvalidStateError):
            await service.cleanup_orphaned_account(PRO_ID, "Athlete-1@example.com")
        assert identity.deleted == []

    @pytest.mark.asyncio
    async def test_unknown_email(self, unit_env):
        service = await unit_env.get(TeamService)
        await make_pro(unit_env)

        with pytest.raises(NotFoundError):
            await service.cleanup_orphaned_account(PRO_ID, "nobody@example.com")
