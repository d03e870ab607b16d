"""Route tests for invite links."""

import pytest

from tests.conftest import make_member, make_pro
from tests.harness import create_api_fixture

api_env = create_api_fixture()


async def _links(api_env, headers) -> dict[str, dict]:
    response = await api_env.client.get("/invite-links", headers=headers)
    assert response.status_code == 200
    return {link["role"]: link for link in response.json()["links"]}


class TestInviteLinkRoutes:
    """Tests for /invite-links."""

    @pytest.mark.asyncio
    async def test_code_is_only_shown_on_creation(self, api_env):
        async with api_env.container() as env:
            await make_pro(env)
        headers = await api_env.token_for("pro-1")

        first = await _links(api_env, headers)
        second = await _links(api_env, headers)

        assert first["STAFF"]["inviteCode"]
        assert first["STAFF"]["maxRedemptions"] == 5
        assert first["ATHLETE"]["maxRedemptions"] == 20
        assert second["STAFF"]["inviteCode"] is None
        assert second["STAFF"]["inviteId"] == first["STAFF"]["inviteId"]

    @pytest.mark.asyncio
    async def test_redeem_accepts_code_aliases(self, api_env):
        # Arrange
        async with api_env.container() as env:
            await make_pro(env)
        links = await _links(api_env, await api_env.token_for("pro-1"))
        code = links["ATHLETE"]["inviteCode"]

        # Act
        by_camel = await api_env.client.post(
            "/invite-links/redeem",
            json={"inviteCode": code},
            headers=await api_env.token_for("athlete-1"),
        )
        by_short = await api_env.client.post(
            "/invite-links/redeem",
            json={"code": code},
            headers=await api_env.token_for("athlete-2"),
        )

        # Assert
        assert by_camel.status_code == 200
        assert by_short.status_code == 200
        validation = await api_env.client.post(
            "/invite-links/validate", json={"inviteCode": code}
        )
        assert validation.json()["remaining"] == 18

    @pytest.mark.asyncio
    async def test_regenerate_and_deactivate(self, api_env):
        # Arrange
        async with api_env.container() as env:
            await make_pro(env)
        headers = await api_env.token_for("pro-1")
        old_code = (await _links(api_env, headers))["STAFF"]["inviteCode"]

        # Act
        regenerated = await api_env.client.post(
            "/invite-links/regenerate", json={"role": "STAFF"}, headers=headers
        )
        deactivated = await api_env.client.post(
            "/invite-links/status",
            json={"role": "STAFF", "active": False},
            headers=headers,
        )

        # Assert
        new_code = regenerated.json()["inviteCode"]
        assert new_code and new_code != old_code
        assert deactivated.json()["active"] is False

        old = await api_env.client.post(
            "/invite-links/validate", json={"code": old_code}
        )
        new = await api_env.client.post(
            "/invite-links/validate", json={"code": new_code}
        )
        assert old.json()["reason"] == "Invalid invite link"
        assert new.json()["reason"] == "This invite link has been deactivated"

    @pytest.mark.asyncio
    async def test_members_cannot_list_links(self, api_env):
        async with api_env.container() as env:
            await make_pro(env)
            await make_member(env, "athlete-1", "pro-1")

        response = await api_env.client.get(
            "/invite-links", headers=await api_env.token_for("athlete-1")
        )

        assert response.status_code == 403
