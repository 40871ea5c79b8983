import logging
import os
from contextlib import asynccontextmanager
from time import time
from typing import Optional
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from dbwriter.bootstrap import bootstrap_database
from dbwriter.config import Settings, load_settings
from dbwriter.database import engine_from_settings
from dbwriter.errors import register_error_handlers
from dbwriter.metrics import make_statsd_client
from dbwriter.routes.healthRoutes import make_router as make_health_router
from dbwriter.routes.sampleRoutes import make_router as make_sample_router
from dbwriter.store import SampleStore

logger = logging.getLogger(__name__)


def _usable_cpus() -> int:
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0))
    return os.cpu_count() or 1


def create_app(settings: Optional[Settings] = None, store: Optional[SampleStore] = None) -> FastAPI:
    """Build the application around an explicitly constructed sample store."""
    settings = settings or load_settings()
    statsd_client = make_statsd_client(settings)
    if store is None:
        store = SampleStore(engine_from_settings(settings), statsd_client)
    elif store.statsd_client is None:
        store.statsd_client = statsd_client

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        await bootstrap_database(store.engine)
        logger.info("NumCPU: %d and usable CPUs: %d", os.cpu_count() or 1, _usable_cpus())
        logger.info("Started up!")
        try:
            yield
        finally:
            await store.dispose()

    app = FastAPI(
        title="dbwriter",
        description="Stores and serves time-stamped numeric samples.",
        lifespan=lifespan,
        docs_url="/swagger/index.html",
        openapi_url="/swagger/doc.json",
        redoc_url=None,
    )
    app.state.store = store
    app.state.statsd_client = statsd_client

    @app.middleware("http")
    async def add_metrics(request: Request, call_next):
        # Start timer
        start_time = time()
        response = await call_next(request)
        duration = time() - start_time

        statsd_client.incr(f"{request.url.path}.count")  # Count each API call
        statsd_client.timing(f"{request.url.path}.response_time", duration * 1000)  # API response time in ms

        return response

    @app.get("/swagger", include_in_schema=False)
    @app.get("/swagger/", include_in_schema=False)
    async def swagger_index():
        return RedirectResponse(url="/swagger/index.html")

    register_error_handlers(app)

    # Include the routes
    app.include_router(make_health_router(store))
    app.include_router(make_sample_router(store), prefix="/samples", tags=["Samples"])
    return app


def run():
    settings = load_settings()
    logging.basicConfig(level=settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, lifespan="on")


if __name__ == "__main__":
    run()
