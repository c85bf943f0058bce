"""
Console entry point that serves the Todo Backend with uvicorn.

Usage:
    todo-backend
    python -m src.api.server
"""
from __future__ import annotations

import logging

import uvicorn

from .logging_utils import configure_logging
from .settings import get_settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def main() -> None:
    """Load settings from the environment and run the HTTP server."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Server is listening on %s:%s", settings.host, settings.port)
    uvicorn.run(
        "src.api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    main()
