"""Route tests for single-use invites."""

import pytest

from tests.conftest import make_pro
from tests.harness import create_api_fixture

api_env = create_api_fixture()


class TestCreateInviteRoute:
    """Tests for POST /invites."""

    @pytest.mark.asyncio
    async def test_create_returns_token_and_join_url(self, api_env):
        async with api_env.container() as env:
            await make_pro(env)
        headers = await api_env.token_for("pro-1")

        response = await api_env.client.post(
            "/invites", json={"role": "ATHLETE"}, headers=headers
        )

        assert response.status_code == 201
        body = response.json()
        assert body["role"] == "ATHLETE"
        assert body["proId"] == "pro-1"
        assert body["joinUrl"].endswith(f"/join?token={body['token']}")

    @pytest.mark.asyncio
    async def test_missing_token_is_401(self, api_env):
        response = await api_env.client.post("/invites", json={"role": "ATHLETE"})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_bad_token_is_401(self, api_env):
        response = await api_env.client.post(
            "/invites",
            json={"role": "ATHLETE"},
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_pro_role_is_400(self, api_env):
        async with api_env.container() as env:
            await make_pro(env)
        headers = await api_env.token_for("pro-1")

        response = await api_env.client.post(
            "/invites", json={"role": "PRO"}, headers=headers
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_inactive_pro_is_409(self, api_env):
        async with api_env.container() as env:
            await make_pro(env, active=False)
        headers = await api_env.token_for("pro-1")

        response = await api_env.client.post(
            "/invites", json={"role": "STAFF"}, headers=headers
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "PRO account is not active"


class TestRedeemInviteRoute:
    """Tests for the validate and redeem routes."""

    @pytest.mark.asyncio
    async def test_validate_then_redeem(self, api_env):
        # Arrange
        async with api_env.container() as env:
            await make_pro(env)
        pro_headers = await api_env.token_for("pro-1")
        created = await api_env.client.post(
            "/invites", json={"role": "STAFF"}, headers=pro_headers
        )
        token = created.json()["token"]

        # Act
        validation = await api_env.client.post(
            "/invites/validate", json={"token": token}
        )
        redeemed = await api_env.client.post(
            "/invites/redeem",
            json={"token": token, "displayName": "Coach"},
            headers=await api_env.token_for("staff-1"),
        )
        again = await api_env.client.post(
            "/invites/redeem",
            json={"token": token},
            headers=await api_env.token_for("staff-2"),
        )

        # Assert
        assert validation.json()["valid"] is True
        assert redeemed.status_code == 200
        assert redeemed.json()["role"] == "STAFF"
        assert redeemed.json()["proId"] == "pro-1"
        assert again.status_code == 409
        assert again.json()["detail"] == "Invite has already been claimed"

    @pytest.mark.asyncio
    async def test_unknown_token(self, api_env):
        validation = await api_env.client.post(
            "/invites/validate", json={"token": "nope"}
        )
        redeemed = await api_env.client.post(
            "/invites/redeem",
            json={"token": "nope"},
            headers=await api_env.token_for("staff-1"),
        )

        assert validation.json() == {
            "valid": False,
            "reason": "Invite not found",
            "role": None,
            "proId": None,
            "proName": None,
            "expiresAt": None,
        }
        assert redeemed.status_code == 404
