"""
Top‑level router for version 1 of the API.

This router aggregates domain‑specific routers under a unified
prefix.  When new domains are introduced, update this file to include
their routers.
"""

from fastapi import APIRouter

from .endpoints import info, samples

router = APIRouter()

router.include_router(info.router, tags=["info"])
router.include_router(samples.router, prefix="/samples", tags=["samples"])
