#!/usr/bin/env python3
"""Start the API, failing fast on signing misconfiguration."""

import sys
import logfire
import uvicorn

from jwtauth.config import Settings
from jwtauth.domain.service import JWTService
from jwtauth.util.logging import setup_logging
from jwtauth.util.observability import configure_logfire


def main() -> int:
    """Validate signing settings, then serve the app."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        # Raises ConfigurationError before any request is served
        JWTService(settings.auth)

        logfire.info(
            "Starting API",
            environment=settings.environment,
            host=settings.host,
            port=settings.port,
        )
        uvicorn.run(
            "jwtauth.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
