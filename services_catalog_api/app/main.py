"""
Main entrypoint for the Services Catalog API.

This module assembles the FastAPI application: logging, CORS, error
handlers and routers.  On startup it applies database migrations,
creates the upload directory and starts the orphaned-file cleanup
task; on shutdown the cleanup task is cancelled.  Run it with::

    uvicorn services_catalog_api.app.main:app --reload

or through ``run.py``.
"""

import asyncio
import contextlib
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.router import router
from .core.config import settings
from .core.db import init_db
from .core.errors import register_error_handlers
from .core.logging_config import setup_logging
from .services.asset_store import AssetStore
from .services.reconciler import run_periodically

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.
    setup_logging()

    app = FastAPI(title=settings.project_name, version=settings.api_version)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(router)

    @app.on_event("startup")
    async def startup_event() -> None:
        init_db()
        AssetStore.ensure_root()
        app.state.cleanup_task = None
        if settings.cleanup_enabled:
            app.state.cleanup_task = asyncio.create_task(run_periodically())
        logger.info("%s started (%s)", settings.project_name, settings.environment)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        task = getattr(app.state, "cleanup_task", None)
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
