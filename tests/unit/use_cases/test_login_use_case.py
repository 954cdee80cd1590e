from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.app.repositories.session_repository import SessionStoreError
from src.app.services.session_manager import fingerprint
from src.app.use_cases.auth.login_use_case import LoginUseCase
from src.domain.base import to_epoch
from src.domain.entities import UserRole, UserSession
from tests.utils.factories import make_user

PASSWORD = "Passw0rd!"
TTL = 7 * 24 * 3600


def stub_insert(mock_uow):
    async def insert(user_id, token_hash, expires_at):
        return UserSession(user_id=user_id, token_hash=token_hash, expires_at=expires_at)

    mock_uow.sessions.insert = AsyncMock(side_effect=insert)


@pytest.mark.asyncio
async def test_successful_login(mock_uow, codec):
    """Given valid credentials, a token and user info are returned and a session is created"""
    user = make_user(password=PASSWORD)
    mock_uow.users.get_by_email.return_value = user
    stub_insert(mock_uow)

    result = await LoginUseCase(mock_uow, codec, TTL).execute(user.email, PASSWORD)

    assert result.is_ok()
    data = result.value
    assert data.user.id == str(user.id)
    assert data.user.role == "student"
    assert data.user.last_login_at is not None

    verified = codec.verify(data.token).value
    assert verified.claims.user_id == user.id
    assert verified.claims.college_id == user.college_id

    mock_uow.sessions.revoke_all_active.assert_awaited_once_with(user.id)
    _, token_hash, _ = mock_uow.sessions.insert.await_args.args
    assert token_hash == fingerprint(data.token)
    mock_uow.users.touch_last_login.assert_awaited_once()
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_session_expiry_matches_token(mock_uow, codec):
    user = make_user(password=PASSWORD)
    mock_uow.users.get_by_email.return_value = user
    stub_insert(mock_uow)

    result = await LoginUseCase(mock_uow, codec, TTL).execute(user.email, PASSWORD)

    _, _, expires_at = mock_uow.sessions.insert.await_args.args
    verified = codec.verify(result.value.token).value
    assert to_epoch(expires_at) == verified.expires_at


@pytest.mark.asyncio
async def test_wrong_password(mock_uow, codec):
    user = make_user(password=PASSWORD)
    mock_uow.users.get_by_email.return_value = user

    result = await LoginUseCase(mock_uow, codec, TTL).execute(user.email, "wrong")

    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.sessions.insert.assert_not_awaited()
    mock_uow.sessions.revoke_all_active.assert_not_awaited()


@pytest.mark.asyncio
async def test_unknown_email_same_error(mock_uow, codec):
    mock_uow.users.get_by_email.return_value = None

    result = await LoginUseCase(mock_uow, codec, TTL).execute("nobody@campus.edu", PASSWORD)

    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.sessions.insert.assert_not_awaited()


@pytest.mark.asyncio
async def test_inactive_user_rejected(mock_uow, codec):
    user = make_user(password=PASSWORD, is_active=False)
    mock_uow.users.get_by_email.return_value = user

    result = await LoginUseCase(mock_uow, codec, TTL).execute(user.email, PASSWORD)

    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.sessions.insert.assert_not_awaited()


@pytest.mark.asyncio
async def test_login_succeeds_when_prior_revoke_fails(mock_uow, codec):
    user = make_user(password=PASSWORD, role=UserRole.user)
    mock_uow.users.get_by_email.return_value = user
    mock_uow.sessions.revoke_all_active.side_effect = SessionStoreError("db down")
    stub_insert(mock_uow)

    result = await LoginUseCase(mock_uow, codec, TTL).execute(user.email, PASSWORD)

    assert result.is_ok()
    mock_uow.rollback.assert_awaited_once()
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_login_fails_when_insert_fails(mock_uow, codec):
    user = make_user(password=PASSWORD)
    mock_uow.users.get_by_email.return_value = user
    mock_uow.sessions.insert.side_effect = SessionStoreError("db down")

    result = await LoginUseCase(mock_uow, codec, TTL).execute(user.email, PASSWORD)

    assert result.error.code == "SESSION_CREATION_FAILED"
    mock_uow.commit.assert_not_awaited()
