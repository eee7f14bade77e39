"""
Sample endpoints for API v1.

These routes expose create, retrieve and list operations for samples.
There is no update or delete: samples are immutable once
stored.  Successful responses wrap their payload in ``{"data": ...}``.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from sample_store_api.app.api.deps import get_sample_service
from sample_store_api.app.schemas.sample import (
    SampleCreate,
    SampleListResponse,
    SampleResponse,
)
from sample_store_api.app.services.sample_service import SampleService

router = APIRouter()

NOT_FOUND_MESSAGE = "Record not found!"


@router.post("", response_model=SampleResponse)
async def create_sample(
    sample_in: SampleCreate,
    service: SampleService = Depends(get_sample_service),
) -> SampleResponse:
    """Create a new sample and return it with its generated ID."""
    sample = await service.create_sample(sample_in)
    return SampleResponse(data=sample)


@router.get("/{sample_id}", response_model=SampleResponse)
async def get_sample(
    sample_id: int,
    service: SampleService = Depends(get_sample_service),
) -> SampleResponse:
    """Retrieve a single sample by ID.

    Returns HTTP 404 if the sample does not exist.
    """
    sample = await service.get_sample(sample_id)
    if sample is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    return SampleResponse(data=sample)


@router.get("", response_model=SampleListResponse)
async def list_samples(
    service: SampleService = Depends(get_sample_service),
) -> SampleListResponse:
    """Return every stored sample.

    No pagination or filtering is applied.
    """
    samples = await service.list_samples()
    return SampleListResponse(data=samples)
