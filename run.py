"""Entry point for the Services Catalog API.

Loads configuration from a ``.env`` file in the working directory (if
present) and serves the FastAPI app with Uvicorn.  Host and port come
from ``HOST`` and ``PORT`` (defaults ``0.0.0.0`` and ``5001``).

Usage:
    python run.py
"""
import asyncio
import logging

from dotenv import load_dotenv
from uvicorn import Config, Server


async def main() -> None:
    # Settings are read at import time, so the .env file must be loaded first.
    load_dotenv()
    from services_catalog_api.app.core.config import settings
    from services_catalog_api.app.main import app

    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Serving on http://%s:%s", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
