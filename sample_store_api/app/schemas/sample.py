"""
Pydantic schemas for samples.

A sample is a named, timestamped record with up to two numeric
readings ``v0`` and ``v1``.  A reading that was not supplied is
``None`` all the way down to the database column; it is never turned
into ``0``.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class SampleCreate(BaseModel):
    """Schema for creating a new sample."""

    name: str = Field(..., min_length=1, description="Label of the sample")
    timestamp: datetime = Field(..., description="Point in time the sample was taken")
    # Strict so that booleans and numeric strings are rejected; NaN and
    # Infinity are not JSON and would be stored as NULL.
    v0: Optional[float] = Field(None, strict=True, allow_inf_nan=False, description="First reading, null when absent")
    v1: Optional[float] = Field(None, strict=True, allow_inf_nan=False, description="Second reading, null when absent")


class SampleRead(BaseModel):
    """Schema for reading a sample."""

    id: int
    name: str
    timestamp: datetime
    v0: Optional[float] = None
    v1: Optional[float] = None


class SampleResponse(BaseModel):
    """Envelope for a single sample."""

    data: SampleRead


class SampleListResponse(BaseModel):
    """Envelope for a list of samples."""

    data: List[SampleRead]
