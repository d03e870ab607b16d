"""Unit tests for the domain error mapping."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from roster.adapter.error import ProviderError
from roster.domain.error import (
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from roster.interface.error import register_error_handlers, status_code_for


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (UnauthenticatedError(), 401),
        (ForbiddenError("no"), 403),
        (NotFoundError("Invite", "abc"), 404),
        (InvalidStateError("Invite has expired"), 409),
        (ConflictError(), 409),
        (ValidationError("bad role"), 400),
        (ProviderError("down"), 502),
    ],
)
def test_status_code_for(error, expected):
    assert status_code_for(error) == expected


def test_handler_renders_detail():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/expired")
    async def expired():
        raise InvalidStateError("Invite has expired")

    @app.get("/anonymous")
    async def anonymous():
        raise UnauthenticatedError()

    client = TestClient(app)

    response = client.get("/expired")
    assert response.status_code == 409
    assert response.json() == {"detail": "Invite has expired"}

    response = client.get("/anonymous")
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
