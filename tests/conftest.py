import os
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from dbwriter.bootstrap import apply_migrations, migration_metadata
from dbwriter.config import Settings
from dbwriter.database import Base
from dbwriter.main import create_app
from dbwriter.store import SampleStore

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


def make_test_engine():
    if TEST_DATABASE_URL.startswith("sqlite"):
        # One shared connection, otherwise every checkout sees a new empty database.
        return create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(TEST_DATABASE_URL)


@pytest.fixture(scope="function")
async def test_db():
    """Provide an engine with no tables; everything is dropped afterwards."""
    engine = make_test_engine()
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(migration_metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
async def store(test_db):
    """A sample store on a migrated database."""
    await apply_migrations(test_db)
    return SampleStore(test_db)


@pytest.fixture
def app(store):
    return create_app(Settings(), store=store)


@pytest.fixture
async def client(app):
    """Create a test client for the FastAPI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
