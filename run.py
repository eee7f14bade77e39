"""Entry point for the Sample Store API.

This script serves the FastAPI application with uvicorn.  It is
intended to be executed from the project root, for example under
Docker, where you only specify a single Python file to run.

Configuration such as ``DATABASE_URL``, ``HOST``, ``PORT`` and
``LOG_LEVEL`` is read from the environment; see
``sample_store_api/app/core/config.py`` for the full list.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from sample_store_api.app.core.config import settings
from sample_store_api.app.main import app


async def run_api() -> None:
    """Start the API using Uvicorn.

    Host and port are read from ``settings``.  Defaults are ``0.0.0.0``
    and ``8080``.
    """
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        # Logging is owned by setup_logging in create_app.
        log_config=None,
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    """Run the API until interrupted."""
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Shutting down")


if __name__ == "__main__":
    main()
