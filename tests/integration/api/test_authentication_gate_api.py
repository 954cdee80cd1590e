import time
from datetime import timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient

from config import ApplicationConfig
from src.api.utils.jwt import TokenClaims, TokenCodec
from src.app.services.session_manager import fingerprint
from src.domain.base import utcnow
from src.domain.entities import UserRole, UserSession
from tests.utils.http import bearer


def sign(user_id, ttl=3600, secret=None, clock=time.time):
    codec = TokenCodec(secret or ApplicationConfig.JWT_SECRET, clock=clock)
    return codec.sign(TokenClaims(user_id=user_id, role=UserRole.user), ttl)


@pytest.mark.asyncio
async def test_missing_token(client: AsyncClient):
    response = await client.get("/auth/me")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "NO_TOKEN"
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_non_bearer_scheme(client: AsyncClient):
    response = await client.get("/auth/me", headers={"Authorization": "Basic abc"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "NO_TOKEN"


@pytest.mark.asyncio
async def test_malformed_token(client: AsyncClient):
    response = await client.get("/auth/me", headers=bearer("garbage"))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_forged_token(client: AsyncClient):
    issued = sign(uuid4(), secret="not-the-server-secret")

    response = await client.get("/auth/me", headers=bearer(issued.token))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_expired_token(client: AsyncClient):
    issued = sign(uuid4(), ttl=60, clock=lambda: time.time() - 3600)

    response = await client.get("/auth/me", headers=bearer(issued.token))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "TOKEN_EXPIRED"


@pytest.mark.asyncio
async def test_signed_token_without_session(client: AsyncClient, seed_user):
    user = await seed_user("ada@mail.com", role=UserRole.user)
    issued = sign(user.id)

    response = await client.get("/auth/me", headers=bearer(issued.token))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "SESSION_REVOKED"


@pytest.mark.asyncio
async def test_expired_session_row_with_live_token(client: AsyncClient, seed_user, store):
    """A session whose expires_at has passed is not active, whatever the token says"""
    user = await seed_user("ada@mail.com", role=UserRole.user)
    issued = sign(user.id)
    await store.add(
        UserSession(
            user_id=user.id,
            token_hash=fingerprint(issued.token),
            expires_at=utcnow() - timedelta(seconds=1),
        )
    )

    response = await client.get("/auth/me", headers=bearer(issued.token))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "SESSION_REVOKED"


@pytest.mark.asyncio
async def test_revoked_session_row_with_live_token(client: AsyncClient, seed_user, store):
    user = await seed_user("ada@mail.com", role=UserRole.user)
    issued = sign(user.id)
    await store.add(
        UserSession(
            user_id=user.id,
            token_hash=fingerprint(issued.token),
            expires_at=issued.expires_at,
            is_revoked=True,
        )
    )

    response = await client.get("/auth/me", headers=bearer(issued.token))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "SESSION_REVOKED"
