"""Tests for the error envelope and status mapping."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

from microblog.api.deps import get_revocation_store
from microblog.api.errors import status_for
from microblog.services.errors import (
    AlreadyExistsError,
    ForbiddenError,
    HashingError,
    InvalidInputError,
    NotFoundError,
    SigningError,
    StoreUnavailableError,
    TokenError,
    TokenFailure,
)
from microblog.services.revocation import RevocationStore


@pytest.mark.parametrize(
    "exc,expected",
    [
        (InvalidInputError("bad"), 400),
        (AlreadyExistsError("taken"), 403),
        (ForbiddenError("no"), 403),
        (TokenError(TokenFailure.REVOKED), 403),
        (NotFoundError("gone"), 404),
        (StoreUnavailableError("down"), 500),
        (HashingError("argon2"), 500),
        (SigningError("jwt"), 500),
    ],
)
def test_status_mapping(exc, expected):
    assert status_for(exc) == expected


@pytest.mark.asyncio
async def test_unknown_route(async_client):
    response = await async_client.get("/no/such/route")
    assert response.status_code == 404
    assert response.json() == {"status": 404}


@pytest.mark.asyncio
async def test_wrong_method(async_client):
    response = await async_client.get("/register")
    assert response.status_code == 405
    assert response.json() == {"status": 405}


@pytest.mark.asyncio
async def test_revocation_store_outage_is_500(app, async_client, issuer):
    """A token that cannot be checked against the revocation store is not accepted."""
    client = MagicMock()
    client.exists = AsyncMock(side_effect=RedisConnectionError("connection refused"))
    app.dependency_overrides[get_revocation_store] = lambda: RevocationStore(client, 1.0)

    response = await async_client.get(
        "/auth/logged_in", headers={"Cookie": f"auth={issuer.issue_access(1)}"}
    )
    assert response.status_code == 500
    assert response.json() == {"status": 500}


@pytest.mark.asyncio
async def test_token_failure_kind_is_logged_not_returned(async_client, caplog):
    with caplog.at_level(logging.WARNING, logger="microblog.api.errors"):
        response = await async_client.get(
            "/auth/logged_in", headers={"Cookie": "auth=invalid.token.here"}
        )

    assert response.json() == {"status": 403}
    (record,) = [r for r in caplog.records if r.name == "microblog.api.errors"]
    assert record.token_failure == "signature"
    assert record.status_code == 403


@pytest.mark.asyncio
async def test_unhandled_exception_is_500(app):
    async def boom():
        raise RuntimeError("unexpected")

    app.add_api_route("/boom", boom)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {"status": 500}
