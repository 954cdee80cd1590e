import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_unit_of_work
from src.domain.base import utcnow
from src.domain.entities import College, User, UserRole, UserSession
from tests.utils.factories import make_college, make_user
from tests.utils.http import PASSWORD


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session, monkeypatch):
    from src.api.app import create_app

    monkeypatch.setattr(ApplicationConfig, "BCRYPT_ROUNDS", 4)
    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def store(engine):
    """Reads session rows through a separate connection, bypassing the app's identity map"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    class Store:
        async def sessions_of(self, user_id):
            async with Session() as session:
                result = await session.exec(
                    select(UserSession)
                    .where(UserSession.user_id == user_id)
                    .order_by(UserSession.created_at)
                )
                return list(result.all())

        async def active_sessions_of(self, user_id):
            now = utcnow()
            return [
                s
                for s in await self.sessions_of(user_id)
                if not s.is_revoked and s.expires_at > now
            ]

        async def user(self, user_id):
            async with Session() as session:
                return await session.get(User, user_id)

        async def add(self, *rows):
            async with Session() as session:
                for row in rows:
                    session.add(row)
                await session.commit()

    return Store()


@pytest_asyncio.fixture
async def college(store) -> College:
    college = make_college()
    await store.add(college)
    return college


@pytest_asyncio.fixture
async def seed_user(store):
    """Factory that stores a user with password PASSWORD"""

    async def _seed(email, role=UserRole.student, college_id=None, **kwargs) -> User:
        user = make_user(
            email=email, password=PASSWORD, role=role, college_id=college_id, **kwargs
        )
        await store.add(user)
        return user

    return _seed

