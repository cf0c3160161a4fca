"""pytest fixtures shared across all tests."""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncConnection, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cvecatalog.core.config import Settings
from cvecatalog.core.database import ConnectionGateway
from cvecatalog.models import Base

# SQLite in-memory for tests, no PostgreSQL required.
# Each test function gets its own fresh DB to avoid cross-test pollution.
TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


class RecordingGateway(ConnectionGateway):
    """Gateway that counts how often connections are handed out and returned."""

    def __init__(self, settings: Settings, engine) -> None:
        super().__init__(settings, engine=engine)
        self.acquired = 0
        self.released = 0

    async def acquire(self) -> AsyncConnection:
        conn = await super().acquire()
        self.acquired += 1
        return conn

    async def release(self, conn: AsyncConnection) -> None:
        if not conn.closed:
            self.released += 1
        await super().release(conn)


@pytest.fixture
def settings() -> Settings:
    return Settings(app_debug=True, database_url=TEST_DB_URL)


@pytest_asyncio.fixture
async def engine():
    """Create a fresh in-memory SQLite engine per test function."""
    eng = create_async_engine(
        TEST_DB_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def bare_engine():
    """In-memory engine without any tables, so every catalog query fails."""
    eng = create_async_engine(
        TEST_DB_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Yield an async session bound to the test engine."""
    factory = async_sessionmaker(engine, expire_on_commit=False, autoflush=True)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def seed(db_session):
    """Insert ORM objects and commit them."""

    async def _seed(*objects) -> None:
        db_session.add_all(objects)
        await db_session.commit()

    return _seed


@pytest.fixture
def gateway(settings, engine) -> RecordingGateway:
    return RecordingGateway(settings, engine)


@pytest.fixture
def broken_gateway(settings, bare_engine) -> RecordingGateway:
    return RecordingGateway(settings, bare_engine)


async def _client_for(gateway: ConnectionGateway):
    from cvecatalog.api.app import create_app
    from cvecatalog.api.dependencies import get_connection_gateway

    app = create_app()
    app.dependency_overrides[get_connection_gateway] = lambda: gateway
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest_asyncio.fixture
async def client(gateway):
    """HTTPX async test client wired to the FastAPI app with a test DB."""
    async with await _client_for(gateway) as ac:
        yield ac


@pytest_asyncio.fixture
async def broken_client(broken_gateway):
    async with await _client_for(broken_gateway) as ac:
        yield ac
