"""
Shared FastAPI dependencies.

Services are built once in ``create_app`` and stored on
``app.state``; these helpers hand them to route functions.
"""

from fastapi import Request

from sample_store_api.app.services.sample_service import SampleService


def get_sample_service(request: Request) -> SampleService:
    """Return the sample service bound to the running application."""
    return request.app.state.sample_service
