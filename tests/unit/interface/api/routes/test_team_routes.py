"""Route tests for team management."""

import pytest

from roster.adapter.identity import MockIdentityClient
from roster.domain.service import IdentityProvider
from tests.conftest import make_pro
from tests.harness import create_api_fixture

api_env = create_api_fixture()


async def _join(api_env, account_id: str, role: str = "ATHLETE") -> None:
    created = await api_env.client.post(
        "/invites", json={"role": role}, headers=await api_env.token_for("pro-1")
    )
    response = await api_env.client.post(
        "/invites/redeem",
        json={"token": created.json()["token"]},
        headers=await api_env.token_for(account_id),
    )
    assert response.status_code == 200


class TestTeamRoutes:
    """Tests for /team."""

    @pytest.mark.asyncio
    async def test_team_view_and_removal(self, api_env):
        # Arrange
        async with api_env.container() as env:
            await make_pro(env)
        headers = await api_env.token_for("pro-1")
        await _join(api_env, "staff-1", "STAFF")
        await _join(api_env, "athlete-1")

        # Act
        before = await api_env.client.get("/team", headers=headers)
        removed = await api_env.client.delete(
            "/team/members/athlete-1", headers=headers
        )
        after = await api_env.client.get("/team", headers=headers)

        # Assert
        seats = {s["role"]: s for s in before.json()["seats"]}
        assert seats["STAFF"]["count"] == 1
        assert seats["ATHLETE"]["remaining"] == 19
        assert removed.json()["status"] == "inactive"
        assert [m["id"] for m in after.json()["members"]] == ["staff-1"]

    @pytest.mark.asyncio
    async def test_reconcile_reports_no_change(self, api_env):
        async with api_env.container() as env:
            await make_pro(env)
        headers = await api_env.token_for("pro-1")
        await _join(api_env, "athlete-1")

        response = await api_env.client.post("/team/reconcile", headers=headers)

        assert response.status_code == 200
        assert response.json()["changed"] is False

    @pytest.mark.asyncio
    async def test_orphan_cleanup(self, api_env):
        async with api_env.container() as env:
            await make_pro(env)
        identity: MockIdentityClient = await api_env.container.get(IdentityProvider)
        identity.add_identity("orphan@example.com", "orphan-1")

        response = await api_env.client.post(
            "/team/orphaned-accounts/cleanup",
            json={"email": "orphan@example.com"},
            headers=await api_env.token_for("pro-1"),
        )

        assert response.status_code == 200
        assert response.json()["deletedAccountId"] == "orphan-1"
