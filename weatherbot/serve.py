"""Launch the service with Uvicorn."""

from __future__ import annotations

import logging

import uvicorn

from weatherbot.core.config import get_settings
from weatherbot.core.logging import configure_logging

logger = logging.getLogger("weatherbot.launcher")


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Server listening on %s", settings.port)
    uvicorn.run("weatherbot.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
