#!/usr/bin/env python3
"""Serve the gate API under uvicorn.

Logfire is configured here, before the app module is imported, so that
startup failures (bad settings, missing bot token) are reported.
"""

import sys

import logfire
import uvicorn

from gate.config import Settings
from gate.util.logging import setup_logging
from gate.util.observability import configure_logfire


def main() -> int:
    """Start the API server."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    if not settings.telegram.bot_token:
        logfire.warn("TELEGRAM__BOT_TOKEN is not set; link operations will fail")

    logfire.info(
        "Starting gate API",
        environment=settings.environment,
        webhook_url=settings.api.webhook_url,
    )
    try:
        uvicorn.run(
            "gate.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "Application startup failed",
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
