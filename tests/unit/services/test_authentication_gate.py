from datetime import datetime
from uuid import uuid4

import pytest

from src.api.utils.jwt import TokenClaims, TokenCodec
from src.app.repositories.session_repository import SessionStoreError
from src.app.services.authentication_gate import AuthenticationGate, AuthFailure
from src.app.services.session_manager import fingerprint
from src.domain.entities import UserRole, UserSession


def issue(codec, role=UserRole.student, ttl=3600):
    claims = TokenClaims(user_id=uuid4(), role=role, college_id=uuid4(), year="3")
    return claims, codec.sign(claims, ttl).token


def active_session(claims, token):
    return UserSession(
        user_id=claims.user_id, token_hash=fingerprint(token), expires_at=datetime(2030, 1, 1)
    )


@pytest.mark.asyncio
async def test_valid_token_with_active_session(mock_uow, codec):
    """Given a signed token backed by an active session, the principal is built from claims"""
    claims, token = issue(codec)
    mock_uow.sessions.find_active_by_token_hash.return_value = active_session(claims, token)

    result = await AuthenticationGate(codec, mock_uow).authenticate(token)

    assert result.is_ok()
    context = result.value
    assert context.token == token
    assert context.principal.user_id == claims.user_id
    assert context.principal.role == UserRole.student
    assert context.principal.college_id == claims.college_id
    assert context.principal.year == "3"


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [None, ""])
async def test_missing_token(mock_uow, codec, token):
    result = await AuthenticationGate(codec, mock_uow).authenticate(token)

    assert result.error.code == "NO_TOKEN"
    mock_uow.sessions.find_active_by_token_hash.assert_not_awaited()


@pytest.mark.asyncio
async def test_forged_token_never_reaches_store(mock_uow, codec):
    _, token = issue(TokenCodec("attacker-secret"))

    result = await AuthenticationGate(codec, mock_uow).authenticate(token)

    assert result.error.code == "INVALID_TOKEN"
    mock_uow.sessions.find_active_by_token_hash.assert_not_awaited()


@pytest.mark.asyncio
async def test_expired_token(mock_uow):
    signer = TokenCodec("secret", clock=lambda: 1_000)
    _, token = issue(signer, ttl=10)
    codec = TokenCodec("secret", clock=lambda: 1_010)

    result = await AuthenticationGate(codec, mock_uow).authenticate(token)

    assert result.error.code == "TOKEN_EXPIRED"


@pytest.mark.asyncio
async def test_inactive_session_is_session_revoked(mock_uow, codec):
    """Not found, revoked and expired sessions all map to SESSION_REVOKED"""
    _, token = issue(codec)
    mock_uow.sessions.find_active_by_token_hash.return_value = None

    result = await AuthenticationGate(codec, mock_uow).authenticate(token)

    assert result.error.code == "SESSION_REVOKED"


@pytest.mark.asyncio
async def test_store_failure_is_validation_failed(mock_uow, codec):
    _, token = issue(codec)
    mock_uow.sessions.find_active_by_token_hash.side_effect = SessionStoreError("db down")

    result = await AuthenticationGate(codec, mock_uow).authenticate(token)

    assert result.error.code == "SESSION_VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_gate_performs_no_writes(mock_uow, codec):
    claims, token = issue(codec)
    mock_uow.sessions.find_active_by_token_hash.return_value = active_session(claims, token)

    await AuthenticationGate(codec, mock_uow).authenticate(token)

    mock_uow.commit.assert_not_awaited()
    mock_uow.sessions.insert.assert_not_awaited()
    mock_uow.sessions.revoke_by_token_hash.assert_not_awaited()


@pytest.mark.asyncio
async def test_optional_gate_returns_anonymous_on_failure(mock_uow, codec):
    _, token = issue(codec)
    mock_uow.sessions.find_active_by_token_hash.return_value = None

    context = await AuthenticationGate(codec, mock_uow).authenticate_optional(token)

    assert context.principal.is_anonymous
    assert context.token is None


@pytest.mark.asyncio
async def test_optional_gate_anonymous_without_token(mock_uow, codec):
    context = await AuthenticationGate(codec, mock_uow).authenticate_optional(None)

    assert context.principal.is_anonymous


@pytest.mark.asyncio
async def test_optional_gate_authenticates_valid_token(mock_uow, codec):
    claims, token = issue(codec)
    mock_uow.sessions.find_active_by_token_hash.return_value = active_session(claims, token)

    context = await AuthenticationGate(codec, mock_uow).authenticate_optional(token)

    assert context.principal.user_id == claims.user_id


def test_failures_narrow_to_external_codes():
    assert {failure.to_error().code for failure in AuthFailure} == {
        "NO_TOKEN",
        "INVALID_TOKEN",
        "TOKEN_EXPIRED",
        "SESSION_REVOKED",
        "SESSION_VALIDATION_FAILED",
    }
