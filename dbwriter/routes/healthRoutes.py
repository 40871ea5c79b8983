# dbwriter/routes/healthRoutes.py
import logging
from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError
from dbwriter.schemas.sampleSchemas import HTTPError
from dbwriter.store import SampleStore

logger = logging.getLogger(__name__)


def make_router(store: SampleStore) -> APIRouter:
    router = APIRouter()

    @router.get("/", status_code=200)
    async def api_root():
        return {"data": "Hello, World!"}

    @router.get("/healthz", status_code=200, responses={503: {"model": HTTPError}})
    async def health_check():
        try:
            # Check database connectivity
            await store.ping()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database check failed: {e}")
            raise HTTPException(status_code=503, detail=f"Database check failed: {str(e)}")
        return Response(status_code=200)

    return router
