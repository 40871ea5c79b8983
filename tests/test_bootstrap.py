import logging
import pytest
from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine
from dbwriter.bootstrap import MIGRATIONS, apply_migrations, bootstrap_database, schema_migrations
from dbwriter.config import Settings
from dbwriter.main import create_app
from dbwriter.store import SampleStore


async def table_names(engine):
    async with engine.connect() as conn:
        return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())


@pytest.mark.asyncio
async def test_migrations_create_samples_table(test_db):
    applied = await apply_migrations(test_db)
    assert applied == [version for version, _, _ in MIGRATIONS]

    tables = await table_names(test_db)
    assert "samples" in tables
    assert "schema_migrations" in tables


@pytest.mark.asyncio
async def test_migrations_are_recorded_and_idempotent(test_db):
    await apply_migrations(test_db)
    assert await apply_migrations(test_db) == []

    async with test_db.connect() as conn:
        result = await conn.execute(select(schema_migrations.c.version))
        versions = [row[0] for row in result]
    assert versions == [version for version, _, _ in MIGRATIONS]


@pytest.mark.asyncio
async def test_bootstrap_fails_when_database_is_unreachable(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/missing/dir/samples.db")
    with pytest.raises(SQLAlchemyError):
        await bootstrap_database(engine)
    await engine.dispose()


@pytest.mark.asyncio
async def test_startup_migrates_and_logs(test_db, caplog):
    app = create_app(Settings(), store=SampleStore(test_db))

    with caplog.at_level(logging.INFO, logger="dbwriter.main"):
        async with app.router.lifespan_context(app):
            assert "samples" in await table_names(test_db)

    messages = [record.getMessage() for record in caplog.records if record.name == "dbwriter.main"]
    assert len(messages) == 2
    assert messages[0].startswith("NumCPU: ")
    assert messages[1] == "Started up!"
