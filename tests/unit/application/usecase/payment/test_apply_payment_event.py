"""Unit tests for ApplyPaymentEventUseCase."""

import pytest

from roster.application.usecase.payment import ApplyPaymentEventUseCase
from roster.domain.repository import AccountRepository
from roster.domain.value import AccountId, PaymentEvent, PaymentKind, ProStatus
from tests.conftest import make_pro
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestApplyPaymentEventUseCase:
    """Tests for ApplyPaymentEventUseCase."""

    @pytest.mark.asyncio
    async def test_pro_upgrade_activates_account(self, unit_env):
        await make_pro(unit_env, active=False)
        use_case = await unit_env.get(ApplyPaymentEventUseCase)

        response = await use_case.execute(
            PaymentEvent(
                account_id=AccountId("pro-1"), payment_kind=PaymentKind.PRO_UPGRADE
            )
        )

        account_repo = await unit_env.get(AccountRepository)
        account = await account_repo.find_by_id(AccountId("pro-1"))
        assert response.applied is True
        assert response.claims_synced is True
        assert account.pro_status == ProStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_training_purchase_is_ignored(self, unit_env):
        await make_pro(unit_env, active=False)
        use_case = await unit_env.get(ApplyPaymentEventUseCase)

        response = await use_case.execute(
            PaymentEvent(
                account_id=AccountId("pro-1"),
                payment_kind=PaymentKind.TRAINING_SESSION,
            )
        )

        assert response.applied is False
        assert response.claims_synced is None
