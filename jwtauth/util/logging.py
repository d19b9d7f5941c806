"""Stdlib logging setup.

Route handlers and the error handlers log through ``logging``; domain
code uses logfire directly. Both must never emit a usable credential,
so every handler installed here carries ``CredentialRedactingFilter``.
"""

import logging
import re
import sys

from jwtauth.config import Settings

# header.payload.signature, each part base64url
_JWT_PATTERN = re.compile(r"\beyJ[\w-]*\.[\w-]+\.[\w-]+")
_BEARER_PATTERN = re.compile(r"(?i)\bBearer\s+\S+")

REDACTED = "[REDACTED]"

_NOISY_LOGGERS = ("httpx", "httpcore", "redis", "asyncio")


class CredentialRedactingFilter(logging.Filter):
    """Masks JWTs and bearer credentials in log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _BEARER_PATTERN.sub(f"Bearer {REDACTED}", message)
        redacted = _JWT_PATTERN.sub(REDACTED, redacted)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging(settings: Settings) -> None:
    """Configure the root logger for the API process.

    DEBUG when ``settings.debug`` is on, INFO otherwise; chatty client
    libraries are held at WARNING.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)-7s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    handler.addFilter(CredentialRedactingFilter())

    logging.basicConfig(level=level, handlers=[handler], force=True)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("jwtauth").setLevel(level)

    get_logger(__name__).info(
        f"Logging ready: environment={settings.environment} "
        f"level={logging.getLevelName(level)}"
    )


def get_logger(name: str) -> logging.Logger:
    """Logger for a jwtauth module (pass ``__name__``)."""
    return logging.getLogger(name)
