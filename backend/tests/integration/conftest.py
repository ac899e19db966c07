"""Database fixtures for integration tests: a throwaway SQLite file per test."""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from newsroom.infrastructure.database import Base
from newsroom.infrastructure.database.session import configure_sqlite, get_db_session
from newsroom.infrastructure.dependencies import get_image_storage, get_password_hasher
from newsroom.infrastructure.security import Argon2PasswordHasher
from newsroom.infrastructure.storage.local_image_storage import LocalImageStorage
from newsroom.main import create_app

FAST_HASHER = Argon2PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1)


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'newsroom.db'}")
    configure_sqlite(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(session_factory, tmp_path: Path) -> AsyncIterator[AsyncClient]:
    """HTTP client against a fresh app wired to the test database and upload dir."""
    app = create_app()

    async def override_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    storage = LocalImageStorage(str(tmp_path / "uploads"))
    app.dependency_overrides[get_db_session] = override_session
    app.dependency_overrides[get_image_storage] = lambda: storage
    app.dependency_overrides[get_password_hasher] = lambda: FAST_HASHER

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def password_hasher() -> Argon2PasswordHasher:
    return FAST_HASHER
