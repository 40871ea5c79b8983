import logging
from typing import List
from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from dbwriter.schemas.sampleSchemas import HTTPError, SampleCreate, SampleLookup, SampleResponse
from dbwriter.store import SampleStore

logger = logging.getLogger(__name__)


def make_router(store: SampleStore) -> APIRouter:
    """Sample endpoints bound to ``store``."""
    router = APIRouter()

    @router.post(
        "",
        response_model=SampleResponse,
        response_model_exclude_none=True,
        status_code=200,
        responses={400: {"model": HTTPError}, 503: {"model": HTTPError}},
    )
    async def create_sample(sample: SampleCreate):
        try:
            created = await store.create(sample)
        except SQLAlchemyError as e:
            logger.error(f"Database error occurred: {e}")
            raise HTTPException(status_code=503, detail="Database error occurred")
        return SampleResponse.model_validate(created)

    # The fetched row is not echoed back; callers only get an acknowledgement.
    @router.get(
        "/{sample_id}",
        response_model=SampleLookup,
        responses={404: {"model": HTTPError}},
    )
    async def get_sample(sample_id: str):
        try:
            lookup_id = int(sample_id)
        except ValueError:
            raise HTTPException(status_code=404, detail=f"invalid sample id: {sample_id}")

        try:
            sample = await store.get(lookup_id)
        except SQLAlchemyError as e:
            logger.error(f"Database error occurred: {e}")
            raise HTTPException(status_code=404, detail=str(e))

        if sample is None:
            raise HTTPException(status_code=404, detail="record not found")
        return SampleLookup(message="hey", status=status.HTTP_200_OK)

    @router.get(
        "",
        response_model=List[SampleResponse],
        response_model_exclude_none=True,
        responses={503: {"model": HTTPError}},
    )
    async def list_samples():
        try:
            samples = await store.list_all()
        except SQLAlchemyError as e:
            logger.error(f"Database error occurred: {e}")
            raise HTTPException(status_code=503, detail="Database error occurred")
        return [SampleResponse.model_validate(sample) for sample in samples]

    return router
