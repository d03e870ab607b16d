"""Test harness for integration and E2E tests.

Unit tests run against in-memory persistence and mock identity; integration
tests unmock persistence and assume PostgreSQL is running.
Settings are loaded from environment variables (configure via .env or export).
"""

import asyncio
from contextlib import contextmanager
from unittest.mock import patch

import httpx
import pytest_asyncio

from roster.domain.error import ConflictError
from roster.domain.service import IdentityProvider
from roster.interface.api.app import create_app
from roster.persistence.repository.inmemory.transaction import (
    InMemoryTransactionScope,
)
from roster.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Assumes docker services already running (no docker management)
    - Settings loaded from environment automatically

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no docker needed
        unit_env = test_env()

        # Integration tests - real persistence, assumes postgres running
        integration_env = test_env(unmock={"persistence"})

        # E2E tests - real everything, assumes all services running
        e2e_env = test_env(unmock={"persistence", "identity"})

        @pytest.mark.asyncio
        async def test_save_account(integration_env):
            repo = await integration_env.get(AccountRepository)
            account = await repo.save(Account(...))
            assert account.version == 1
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        # Build container with specified unmocking
        container = build_test_container(unmock=unmock or set())

        # Open request-scoped context
        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


class ApiEnv:
    """HTTP client against the app plus the container behind it."""

    def __init__(self, client, container) -> None:
        self.client = client
        self.container = container

    async def token_for(self, account_id: str) -> dict[str, str]:
        """Authorization header for account_id, issued by the mock identity."""
        identity = await self.container.get(IdentityProvider)
        return {"Authorization": f"Bearer {identity.issue_token(account_id)}"}


def create_api_fixture():
    """Factory for fixtures that drive the FastAPI app over ASGI.

    Everything is mocked; the fixture yields an ApiEnv whose container is the
    one serving the app, so tests can seed state and inspect the mocks.
    """

    @pytest_asyncio.fixture
    async def _api_environment():
        container = build_test_container()
        app = create_app(container)
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(
            transport=transport, base_url="http://test"
        ) as client:
            yield ApiEnv(client, container)

        await container.close()

    return _api_environment


@contextmanager
def interleaved_transactions():
    """Make in-memory units of work overlap.

    Every account read inside a transaction yields to the event loop, so
    units of work started together with asyncio.gather read the same
    snapshot before either commits. Yields a list that records "ok" or
    "conflict" for every commit attempt.
    """
    load_account = InMemoryTransactionScope._load_account
    commit = InMemoryTransactionScope.commit
    outcomes: list[str] = []

    async def yielding_load_account(self, account_id):
        await asyncio.sleep(0)
        return await load_account(self, account_id)

    async def recording_commit(self):
        try:
            await commit(self)
        except ConflictError:
            outcomes.append("conflict")
            raise
        outcomes.append("ok")

    with (
        patch.object(InMemoryTransactionScope, "_load_account", yielding_load_account),
        patch.object(InMemoryTransactionScope, "commit", recording_commit),
    ):
        yield outcomes
