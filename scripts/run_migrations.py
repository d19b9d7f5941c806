#!/usr/bin/env python3
"""Apply Alembic migrations up to head."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from jwtauth.config import Settings
from jwtauth.util.observability import configure_logfire


def main() -> int:
    """Upgrade the users/user_identities schema to the latest revision."""
    settings = Settings()
    configure_logfire(settings)

    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database.url)

    with logfire.span("run_migrations", environment=settings.environment):
        try:
            command.upgrade(alembic_cfg, "head")
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Re-raise so the deploy stops before serving a stale schema
            raise

    logfire.info("Database migrations completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
