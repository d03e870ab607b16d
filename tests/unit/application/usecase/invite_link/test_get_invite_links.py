"""Unit tests for GetInviteLinksUseCase."""

import pytest

from roster.application.usecase.invite_link import (
    GetInviteLinksRequest,
    GetInviteLinksUseCase,
)
from roster.config import Settings
from roster.domain.value import Role
from tests.conftest import make_pro
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetInviteLinksUseCase:
    """Tests for GetInviteLinksUseCase."""

    @pytest.mark.asyncio
    async def test_new_links_carry_code_and_join_url(self, unit_env):
        """Freshly created links expose their code once."""
        await make_pro(unit_env)
        use_case = await unit_env.get(GetInviteLinksUseCase)
        settings = await unit_env.get(Settings)

        response = await use_case.execute(GetInviteLinksRequest(caller_id="pro-1"))

        links = {link.role: link for link in response.links}
        assert set(links) == {Role.STAFF, Role.ATHLETE}
        staff = links[Role.STAFF]
        assert staff.invite_code
        assert staff.join_url == settings.join_url(staff.invite_code)
        assert staff.join_url.endswith(f"/join?token={staff.invite_code}")
        assert staff.remaining == 5

    @pytest.mark.asyncio
    async def test_existing_links_hide_code(self, unit_env):
        """A second read returns the same links without their codes."""
        await make_pro(unit_env)
        use_case = await unit_env.get(GetInviteLinksUseCase)
        request = GetInviteLinksRequest(caller_id="pro-1")

        first = await use_case.execute(request)
        second = await use_case.execute(request)

        assert {link.invite_id for link in first.links} == {
            link.invite_id for link in second.links
        }
        assert all(link.invite_code is None for link in second.links)
        assert all(link.join_url is None for link in second.links)
