import pytest
from dbwriter.config import Settings
from dbwriter.database import engine_from_settings, make_engine
from dbwriter.main import create_app
from dbwriter.store import SampleStore


def test_server_engine_pool_bounds():
    # No connection is opened until first use.
    engine = make_engine("postgresql+asyncpg://u@h/db")
    pool = engine.sync_engine.pool
    assert pool.size() == 8
    assert pool._max_overflow == 0
    assert pool._recycle == 3600


def test_engine_pool_bounds_follow_settings():
    engine = engine_from_settings(Settings(
        database_url="postgresql+asyncpg://u@h/db",
        pool_size=4,
        max_overflow=2,
        pool_recycle=60,
    ))
    pool = engine.sync_engine.pool
    assert pool.size() == 4
    assert pool._max_overflow == 2
    assert pool._recycle == 60


def test_sqlite_engine_takes_no_pool_arguments():
    engine = make_engine("sqlite+aiosqlite:///:memory:")
    assert engine.sync_engine.dialect.name == "sqlite"


@pytest.mark.asyncio
async def test_metrics_client_follows_settings(test_db):
    store = SampleStore(test_db)
    app = create_app(Settings(statsd_prefix="samples-test"), store=store)
    assert app.state.statsd_client._prefix == "samples-test"
    assert store.statsd_client is app.state.statsd_client
