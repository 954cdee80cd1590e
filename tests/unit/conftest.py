from unittest.mock import AsyncMock, MagicMock

import pytest

from src.api.utils.jwt import TokenCodec

TEST_SECRET = "unit-test-secret"


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.touch_last_login = AsyncMock()

    uow.colleges = MagicMock()
    uow.colleges.get_by_id = AsyncMock()
    uow.colleges.get_by_code = AsyncMock()
    uow.colleges.list_active = AsyncMock(return_value=[])
    uow.colleges.create = AsyncMock(side_effect=lambda college: college)

    uow.sessions = MagicMock()
    uow.sessions.insert = AsyncMock()
    uow.sessions.revoke_all_active = AsyncMock(return_value=0)
    uow.sessions.revoke_by_token_hash = AsyncMock(return_value=True)
    uow.sessions.find_active_by_token_hash = AsyncMock()
    uow.sessions.update_token_hash_and_expiry = AsyncMock()
    uow.sessions.delete_created_before = AsyncMock(return_value=0)
    uow.sessions.delete_expired = AsyncMock(return_value=0)
    uow.sessions.get_stats = AsyncMock()
    return uow


@pytest.fixture
def codec():
    return TokenCodec(TEST_SECRET)

