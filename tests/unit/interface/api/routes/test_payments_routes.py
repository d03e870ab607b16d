"""Route tests for payment events."""

import pytest

from roster.config import PaymentSettings
from tests.conftest import make_pro
from tests.harness import create_api_fixture

api_env = create_api_fixture()


class TestPaymentEventRoute:
    """Tests for POST /payments/events."""

    @pytest.mark.asyncio
    async def test_upgrade_with_secret(self, api_env):
        async with api_env.container() as env:
            await make_pro(env, active=False)
        secret = (await api_env.container.get(PaymentSettings)).event_secret

        response = await api_env.client.post(
            "/payments/events",
            json={"accountId": "pro-1", "paymentKind": "pro_upgrade"},
            headers={"X-Event-Secret": secret},
        )

        assert response.status_code == 200
        assert response.json()["applied"] is True

    @pytest.mark.asyncio
    async def test_training_payment_is_acknowledged(self, api_env):
        async with api_env.container() as env:
            await make_pro(env, active=False)
        secret = (await api_env.container.get(PaymentSettings)).event_secret

        response = await api_env.client.post(
            "/payments/events",
            json={"accountId": "pro-1", "paymentKind": "training_package"},
            headers={"X-Event-Secret": secret},
        )

        assert response.status_code == 200
        assert response.json()["applied"] is False

    @pytest.mark.asyncio
    async def test_wrong_secret_is_401(self, api_env):
        response = await api_env.client.post(
            "/payments/events",
            json={"accountId": "pro-1", "paymentKind": "pro_upgrade"},
            headers={"X-Event-Secret": "wrong"},
        )

        assert response.status_code == 401
