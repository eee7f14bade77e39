"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Configuration, logging and database access live in
``core``; request and response models in ``schemas``; persistence
logic in ``services``; and HTTP routes in ``api/v1/endpoints``.
"""

from .main import app  # noqa: F401
