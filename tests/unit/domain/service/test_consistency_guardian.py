"""Unit tests for ConsistencyGuardian."""

import pytest

from roster.adapter.identity import MockIdentityClient
from roster.config import IdentitySettings
from roster.domain.model import Account
from roster.domain.repository import AccountRepository, TransactionRunner
from roster.domain.service import ConsistencyGuardian, IdentityProvider
from roster.domain.value import AccountClaims, AccountId, ProStatus, Role
from roster.util.clock import Clock
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _drifted_pro(env) -> Account:
    """Active PRO whose pro_id points at someone else."""
    account_repo = await env.get(AccountRepository)
    return await account_repo.save(
        Account(
            id=AccountId("u1"),
            role=Role.PRO,
            pro_id=AccountId("someone-else"),
            pro_status=ProStatus.ACTIVE,
        )
    )


class TestEnsureConsistent:
    """Tests for ensure_consistent method."""

    @pytest.mark.asyncio
    async def test_repairs_pro_id_and_mirrors_claims(self, unit_env):
        """A PRO's pro_id is reset to its own id and the claims follow."""
        # Arrange
        guardian = await unit_env.get(ConsistencyGuardian)
        account_repo = await unit_env.get(AccountRepository)
        identity: MockIdentityClient = await unit_env.get(IdentityProvider)
        await _drifted_pro(unit_env)

        # Act
        outcome = await guardian.ensure_consistent(AccountId("u1"))

        # Assert
        assert outcome.repaired is True
        assert outcome.claims_synced is True
        account = await account_repo.find_by_id(AccountId("u1"))
        assert account.pro_id == "u1"
        assert account.consistency_repaired_at is not None
        assert identity.claims[AccountId("u1")] == AccountClaims(
            role=Role.PRO, pro_id=AccountId("u1"), pro_status=ProStatus.ACTIVE
        )
        assert account.mirrored_claims == identity.claims[AccountId("u1")]

    @pytest.mark.asyncio
    async def test_active_subscription_forces_pro_role(self, unit_env):
        guardian = await unit_env.get(ConsistencyGuardian)
        account_repo = await unit_env.get(AccountRepository)
        await account_repo.save(
            Account(
                id=AccountId("u2"),
                role=Role.ATHLETE,
                pro_id=AccountId("u2"),
                pro_status=ProStatus.ACTIVE,
            )
        )

        outcome = await guardian.ensure_consistent(AccountId("u2"))

        assert outcome.repaired is True
        assert outcome.account.role == Role.PRO

    @pytest.mark.asyncio
    async def test_second_pass_is_a_no_op(self, unit_env):
        """A consistent, mirrored account causes no writes and no provider calls."""
        # Arrange
        guardian = await unit_env.get(ConsistencyGuardian)
        account_repo = await unit_env.get(AccountRepository)
        identity: MockIdentityClient = await unit_env.get(IdentityProvider)
        await _drifted_pro(unit_env)
        await guardian.ensure_consistent(AccountId("u1"))
        calls = len(identity.set_claims_calls)
        version = (await account_repo.find_by_id(AccountId("u1"))).version

        # Act
        outcome = await guardian.ensure_consistent(AccountId("u1"))

        # Assert
        assert outcome.repaired is False
        assert len(identity.set_claims_calls) == calls
        assert (await account_repo.find_by_id(AccountId("u1"))).version == version

    @pytest.mark.asyncio
    async def test_non_pro_accounts_are_left_alone(self, unit_env):
        guardian = await unit_env.get(ConsistencyGuardian)
        account_repo = await unit_env.get(AccountRepository)
        await account_repo.save(
            Account(id=AccountId("a1"), role=Role.ATHLETE, pro_id=AccountId("p1"))
        )

        outcome = await guardian.ensure_consistent(AccountId("a1"))

        assert outcome.repaired is False
        assert outcome.account.pro_id == "p1"


class TestSyncClaims:
    """Tests for claim mirroring failures."""

    @pytest.mark.asyncio
    async def test_provider_failure_is_reported_not_raised(self, unit_env):
        """The account stays repaired when the provider keeps failing."""
        # Arrange
        identity: MockIdentityClient = await unit_env.get(IdentityProvider)
        account_repo = await unit_env.get(AccountRepository)
        guardian = ConsistencyGuardian(
            identity_provider=identity,
            transaction_runner=await unit_env.get(TransactionRunner),
            identity_settings=IdentitySettings(
                claim_mirror_attempts=2, claim_mirror_backoff_seconds=0
            ),
            clock=await unit_env.get(Clock),
        )
        await _drifted_pro(unit_env)
        identity.fail_next_set_claims(times=2)

        # Act
        outcome = await guardian.ensure_consistent(AccountId("u1"))

        # Assert
        assert outcome.repaired is True
        assert outcome.claims_synced is False
        assert len(identity.set_claims_calls) == 2
        account = await account_repo.find_by_id(AccountId("u1"))
        assert account.pro_id == "u1"
        assert account.mirrored_claims is None

    @pytest.mark.asyncio
    async def test_transient_failure_is_retried(self, unit_env):
        identity: MockIdentityClient = await unit_env.get(IdentityProvider)
        guardian = ConsistencyGuardian(
            identity_provider=identity,
            transaction_runner=await unit_env.get(TransactionRunner),
            identity_settings=IdentitySettings(
                claim_mirror_attempts=3, claim_mirror_backoff_seconds=0
            ),
            clock=await unit_env.get(Clock),
        )
        await _drifted_pro(unit_env)
        identity.fail_next_set_claims(times=1)

        outcome = await guardian.ensure_consistent(AccountId("u1"))

        assert outcome.claims_synced is True
        assert len(identity.set_claims_calls) == 2

    @pytest.mark.asyncio
    async def test_force_pushes_matching_claims(self, unit_env):
        guardian = await unit_env.get(ConsistencyGuardian)
        identity: MockIdentityClient = await unit_env.get(IdentityProvider)
        await _drifted_pro(unit_env)
        outcome = await guardian.ensure_consistent(AccountId("u1"))
        calls = len(identity.set_claims_calls)

        await guardian.sync_claims(outcome.account, force=True)

        assert len(identity.set_claims_calls) == calls + 1


class TestRequiresRepair:
    """Tests for requires_repair method."""

    def _guardian(self) -> ConsistencyGuardian:
        return ConsistencyGuardian(
            identity_provider=MockIdentityClient(),
            transaction_runner=None,
            identity_settings=IdentitySettings(),
            clock=None,
        )

    def test_becoming_pro_requires_repair(self):
        before = Account(id=AccountId("u1"), role=Role.ATHLETE)
        after = before.model_copy(update={"pro_status": ProStatus.ACTIVE})

        assert self._guardian().requires_repair(before, after) is True

    def test_consistent_pro_does_not(self):
        pro = Account(
            id=AccountId("u1"),
            role=Role.PRO,
            pro_id=AccountId("u1"),
            pro_status=ProStatus.ACTIVE,
        )

        assert self._guardian().requires_repair(pro, pro) is False

    def test_members_never_do(self):
        member = Account(id=AccountId("a1"), role=Role.STAFF, pro_id=AccountId("p1"))

        assert self._guardian().requires_repair(None, member) is False
