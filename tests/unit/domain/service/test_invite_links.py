"""Unit tests for InviteLifecycleService invite links."""

import asyncio

import pytest

from roster.domain.error import ForbiddenError, InvalidStateError, NotFoundError
from roster.domain.repository import PersistentInviteRepository, TeamRepository
from roster.domain.service import InviteLifecycleService, TeamService
from roster.domain.value import AccountId, AccountProfile, Role
from tests.conftest import make_member, make_pro
from tests.harness import create_env_fixture, interleaved_transactions

# Unit test fixture
unit_env = create_env_fixture()

PRO_ID = AccountId("pro-1")


def _profile(n: int) -> AccountProfile:
    return AccountProfile(email=f"staff-{n}@example.com", display_name=f"Staff {n}")


class TestGetOrCreatePersistent:
    """Tests for get_or_create_persistent method."""

    @pytest.mark.asyncio
    async def test_first_call_creates_link_with_secret(self, unit_env):
        """The first call should mint the secret and cap the link at the role limit."""
        service = await unit_env.get(InviteLifecycleService)
        await make_pro(unit_env)

        issued = await service.get_or_create_persistent(PRO_ID, Role.STAFF)

        assert issued.secret is not None
        assert issued.invite.max_redemptions == 5
        assert issued.invite.redeemed_count == 0
        assert issued.invite.active is True

    @pytest.mark.asyncio
    async def test_is_idempotent(self, unit_env):
        """Repeated calls should return the same link without a secret."""
        service = await unit_env.get(InviteLifecycleService)
        invite_repo = await unit_env.get(PersistentInviteRepository)
        await make_pro(unit_env)

        first = await service.get_or_create_persistent(PRO_ID, Role.ATHLETE)
        second = await service.get_or_create_persistent(PRO_ID, Role.ATHLETE)

        assert second.invite.id == first.invite.id
        assert second.secret is None
        assert len(await invite_repo.find_by_pro(PRO_ID)) == 1

    @pytest.mark.asyncio
    async def test_pair_creates_both_roles(self, unit_env):
        service = await unit_env.get(InviteLifecycleService)
        await make_pro(unit_env)

        links = await service.get_or_create_persistent_pair(PRO_ID)

        assert set(links) == {Role.STAFF, Role.ATHLETE}
        assert links[Role.ATHLETE].invite.max_redemptions == 20

    @pytest.mark.asyncio
    async def test_pair_requires_pro(self, unit_env):
        service = await unit_env.get(InviteLifecycleService)
        await make_pro(unit_env)
        await make_member(unit_env, "athlete-1", "pro-1")

        with pytest.raises(ForbiddenError):
            await service.get_or_create_persistent_pair(AccountId("athlete-1"))


class TestRedeemPersistent:
    """Tests for redeem_persistent method."""

    @pytest.mark.asyncio
    async def test_staff_link_fills_five_seats_then_refuses(self, unit_env):
        """Five redemptions take every STAFF seat; the sixth is refused."""
        # Arrange
        service = await unit_env.get(InviteLifecycleService)
        invite_repo = await unit_env.get(PersistentInviteRepository)
        team_repo = await unit_env.get(TeamRepository)
        await make_pro(unit_env)
        issued = await service.get_or_create_persistent(PRO_ID, Role.STAFF)
        secret = issued.secret.root

        # Act
        for n in range(5):
            await service.redeem_persistent(
                secret, AccountId(f"staff-{n}"), _profile(n)
            )

        # Assert
        with pytest.raises(InvalidStateError, match="STAFF seat limit reached"):
            await service.redeem_persistent(secret, AccountId("staff-5"), _profile(5))

        invite = await invite_repo.find_by_pro_and_role(PRO_ID, Role.STAFF)
        assert invite.redeemed_count == 5
        assert [r.account_id for r in invite.redemptions] == [
            f"staff-{n}" for n in range(5)
        ]
        team = await team_repo.find_by_pro(PRO_ID)
        assert team.staff_count == 5

    @pytest.mark.asyncio
    async def test_concurrent_redemptions_cannot_share_the_last_seat(self, unit_env):
        """Two joiners racing for the last STAFF seat: one gets it, one is refused."""
        # Arrange
        service = await unit_env.get(InviteLifecycleService)
        invite_repo = await unit_env.get(PersistentInviteRepository)
        team_repo = await unit_env.get(TeamRepository)
        await make_pro(unit_env)
        issued = await service.get_or_create_persistent(PRO_ID, Role.STAFF)
        secret = issued.secret.root
        for n in range(4):
            await service.redeem_persistent(
                secret, AccountId(f"staff-{n}"), _profile(n)
            )

        # Act
        with interleaved_transactions() as commits:
            results = await asyncio.gather(
                service.redeem_persistent(secret, AccountId("staff-4"), _profile(4)),
                service.redeem_persistent(secret, AccountId("staff-5"), _profile(5)),
                return_exceptions=True,
            )

        # Assert
        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 1
        assert isinstance(failures[0], InvalidStateError)
        assert "STAFF seat limit reached" in str(failures[0])
        assert "conflict" in commits

        invite = await invite_repo.find_by_pro_and_role(PRO_ID, Role.STAFF)
        assert invite.redeemed_count == 5
        team = await team_repo.find_by_pro(PRO_ID)
        assert team.staff_count == 5

    @pytest.mark.asyncio
    async def test_redeemed_count_is_not_given_back(self, unit_env):
        """Removing a member frees the seat but not the link's redemption."""
        # Arrange
        service = await unit_env.get(InviteLifecycleService)
        team_service = await unit_env.get(TeamService)
        await make_pro(unit_env)
        issued = await service.get_or_create_persistent(PRO_ID, Role.STAFF)
        secret = issued.secret.root
        for n in range(5):
            await service.redeem_persistent(
                secret, AccountId(f"staff-{n}"), _profile(n)
            )

        # Act
        await team_service.remove_member(PRO_ID, AccountId("staff-0"))

        # Assert
        with pytest.raises(InvalidStateError, match="STAFF invite limit reached"):
            await service.redeem_persistent(secret, AccountId("staff-5"), _profile(5))

    @pytest.mark.asyncio
    async def test_deactivated_link_is_refused(self, unit_env):
        service = await unit_env.get(InviteLifecycleService)
        await make_pro(unit_env)
        issued = await service.get_or_create_persistent(PRO_ID, Role.ATHLETE)
        await service.set_active(PRO_ID, Role.ATHLETE, False)

        with pytest.raises(InvalidStateError, match="deactivated"):
            await service.redeem_persistent(
                issued.secret.root, AccountId("athlete-1"), _profile(1)
            )

    @pytest.mark.asyncio
    async def test_unknown_code_is_not_found(self, unit_env):
        service = await unit_env.get(InviteLifecycleService)

        with pytest.raises(NotFoundError, match="Invalid invite link"):
            await service.redeem_persistent(
                "no-such-code", AccountId("athlete-1"), _profile(1)
            )

    @pytest.mark.asyncio
    async def test_member_moves_between_teams(self, unit_env):
        """Joining another team should release the seat on the old one."""
        service = await unit_env.get(InviteLifecycleService)
        team_repo = await unit_env.get(TeamRepository)
        await make_pro(unit_env, "pro-1")
        await make_pro(unit_env, "pro-2")
        first = await service.get_or_create_persistent(PRO_ID, Role.ATHLETE)
        second = await service.get_or_create_persistent(
            AccountId("pro-2"), Role.ATHLETE
        )

        await service.redeem_persistent(
            first.secret.root, AccountId("athlete-1"), _profile(1)
        )
        result = await service.redeem_persistent(
            second.secret.root, AccountId("athlete-1"), _profile(1)
        )

        assert result.pro_id == "pro-2"
        assert (await team_repo.find_by_pro(PRO_ID)).athlete_count == 0
        assert (await team_repo.find_by_pro(AccountId("pro-2"))).athlete_count == 1


class TestValidatePersistent:
    """Tests for validate_persistent method."""

    @pytest.mark.asyncio
    async def test_active_link_is_valid(self, unit_env):
        service = await unit_env.get(InviteLifecycleService)
        await make_pro(unit_env)
        issued = await service.get_or_create_persistent(PRO_ID, Role.ATHLETE)

        validation = await service.validate_persistent(issued.secret.root)

        assert validation.valid is True
        assert validation.invite.remaining == 20

    @pytest.mark.asyncio
    async def test_inactive_pro_reports_no_longer_active(self, unit_env):
        service = await unit_env.get(InviteLifecycleService)
        await make_pro(unit_env)
        issued = await service.get_or_create_persistent(PRO_ID, Role.ATHLETE)
        await make_pro(unit_env, active=False)

        validation = await service.validate_persistent(issued.secret.root)

        assert validation.valid is False
        assert validation.reason == "PRO account is no longer active"

    @pytest.mark.asyncio
    async def test_unknown_code(self, unit_env):
        service = await unit_env.get(InviteLifecycleService)

        validation = await service.validate_persistent("no-such-code")

        assert validation.valid is False
        assert validation.reason == "Invalid invite link"


class TestRegenerate:
    """Tests for regenerate method."""

    @pytest.mark.asyncio
    async def test_old_secret_stops_working(self, unit_env):
        """Regeneration swaps the secret and resets the count and log."""
        # Arrange
        service = await unit_env.get(InviteLifecycleService)
        await make_pro(unit_env)
        issued = await service.get_or_create_persistent(PRO_ID, Role.STAFF)
        old_secret = issued.secret.root
        await service.redeem_persistent(old_secret, AccountId("staff-1"), _profile(1))

        # Act
        regenerated = await service.regenerate(PRO_ID, Role.STAFF)

        # Assert
        assert regenerated.invite.id == issued.invite.id
        assert regenerated.invite.redeemed_count == 0
        assert regenerated.invite.redemptions == ()
        assert (await service.validate_persistent(old_secret)).valid is False
        assert (await service.validate_persistent(regenerated.secret.root)).valid

    @pytest.mark.asyncio
    async def test_regenerate_missing_link(self, unit_env):
        service = await unit_env.get(InviteLifecycleService)
        await make_pro(unit_env)

        with pytest.raises(NotFoundError):
            await service.regenerate(PRO_ID, Role.STAFF)


class TestSetActive:
    """Tests for set_active method."""

    @pytest.mark.asyncio
    async def test_toggle_keeps_count(self, unit_env):
        service = await unit_env.get(InviteLifecycleService)
        await make_pro(unit_env)
        issued = await service.get_or_create_persistent(PRO_ID, Role.ATHLETE)
        await service.redeem_persistent(
            issued.secret.root, AccountId("athlete-1"), _profile(1)
        )

        deactivated = await service.set_active(PRO_ID, Role.ATHLETE, False)
        reactivated = await service.set_active(PRO_ID, Role.ATHLETE, True)

        assert deactivated.active is False
        assert reactivated.active is True
        assert reactivated.redeemed_count == 1
        assert (await service.validate_persistent(issued.secret.root)).valid
