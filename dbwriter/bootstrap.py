import logging
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, func, select
from sqlalchemy.ext.asyncio import AsyncEngine
from dbwriter.database import Base
from dbwriter.models.sample import Sample

logger = logging.getLogger(__name__)

# Version bookkeeping lives outside Base.metadata so migrations can create
# model tables one at a time.
migration_metadata = MetaData()

schema_migrations = Table(
    "schema_migrations",
    migration_metadata,
    Column("version", Integer, primary_key=True),
    Column("description", String, nullable=False),
    Column("applied_at", DateTime(timezone=True), nullable=False),
)


def _create_samples_table(sync_conn):
    Base.metadata.create_all(sync_conn, tables=[Sample.__table__])


# Ordered (version, description, step). Steps receive a synchronous
# connection and must never be edited once released; append new ones.
MIGRATIONS = [
    (1, "create samples table", _create_samples_table),
]


async def current_version(conn) -> int:
    result = await conn.execute(select(func.max(schema_migrations.c.version)))
    return result.scalar() or 0


async def apply_migrations(engine: AsyncEngine):
    """Apply every pending migration in one transaction.

    Returns the list of versions applied by this call.
    """
    applied = []
    async with engine.begin() as conn:
        await conn.run_sync(migration_metadata.create_all)
        version = await current_version(conn)
        for number, description, step in MIGRATIONS:
            if number <= version:
                continue
            logger.debug("Applying migration %d: %s", number, description)
            await conn.run_sync(step)
            await conn.execute(
                schema_migrations.insert().values(
                    version=number,
                    description=description,
                    applied_at=datetime.now(timezone.utc),
                )
            )
            applied.append(number)
    return applied


async def bootstrap_database(engine: AsyncEngine):
    # Errors propagate: a database that cannot be reached or migrated is fatal.
    applied = await apply_migrations(engine)
    if applied:
        logger.debug("Database migrated to version %d", applied[-1])
    return applied
