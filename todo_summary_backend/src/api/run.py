"""CLI entry point running the API and the liveness listener with uvicorn."""
from __future__ import annotations

import asyncio
import logging

import uvicorn

from .liveness import liveness_app
from .logging_config import configure_logging
from .main import create_app
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


async def serve(settings: Settings) -> None:
    """Serve both applications on their ports until shutdown."""
    log_level = settings.log_level.lower()
    api_server = uvicorn.Server(
        uvicorn.Config(create_app(settings), host=settings.host, port=settings.port, log_level=log_level)
    )
    liveness_server = uvicorn.Server(
        uvicorn.Config(liveness_app, host=settings.host, port=settings.liveness_port, log_level=log_level)
    )
    logger.info(
        "Server running on http://%s:%d (liveness on port %d)",
        settings.host,
        settings.port,
        settings.liveness_port,
    )
    await asyncio.gather(api_server.serve(), liveness_server.serve())


def main() -> None:
    """Run the servers."""
    settings = get_settings()
    configure_logging(settings.log_level)
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
