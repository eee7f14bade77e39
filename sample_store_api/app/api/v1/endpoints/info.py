"""
Root greeting endpoint for API v1.

Useful as a liveness probe: it touches neither the database nor any
service.
"""

from fastapi import APIRouter

router = APIRouter()


@router.get("/", response_model=dict)
async def hello() -> dict:
    """Return a static greeting."""
    return {"data": "Hello, World!"}
