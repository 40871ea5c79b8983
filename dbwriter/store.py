from contextlib import asynccontextmanager
from time import time
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine
from statsd import StatsClient
from dbwriter.database import make_session_factory
from dbwriter.models.sample import Sample
from dbwriter.schemas.sampleSchemas import SampleCreate, to_utc


class SampleStore:
    """Storage client for samples.

    Built once per process around an engine and handed to the route
    factories. Every public method runs in its own session and transaction.
    """

    def __init__(self, engine: AsyncEngine, statsd_client: Optional[StatsClient] = None):
        self.engine = engine
        self.statsd_client = statsd_client
        self.session_factory = make_session_factory(engine)

    @asynccontextmanager
    async def session_scope(self):
        session = self.session_factory()
        try:
            start_time = time()
            yield session
            await session.commit()
            duration = time() - start_time
            if self.statsd_client is not None:
                self.statsd_client.timing("database.query_time", duration * 1000)  # DB query time in ms
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create(self, payload: SampleCreate) -> Sample:
        sample = Sample(
            name=payload.name,
            timestamp=to_utc(payload.timestamp),
            v0=payload.v0,
            v1=payload.v1,
        )
        async with self.session_scope() as session:
            session.add(sample)
            await session.flush()  # assigns sample.id
        return sample

    async def get(self, sample_id: int) -> Optional[Sample]:
        async with self.session_scope() as session:
            result = await session.execute(
                select(Sample).where(Sample.id == sample_id).order_by(Sample.id).limit(1)
            )
            return result.scalars().first()

    async def list_all(self) -> List[Sample]:
        async with self.session_scope() as session:
            result = await session.execute(select(Sample))
            return list(result.scalars().all())

    async def ping(self) -> None:
        async with self.session_scope() as session:
            await session.execute(select(1))

    async def dispose(self) -> None:
        await self.engine.dispose()
