"""Logfire tracing and structured events.

Domain services open spans and emit events through ``logfire`` directly:

    with logfire.span("session_service.issue_tokens", user_id=user.id):
        logfire.info("Tokens issued", user_id=user.id)

Attributes must identify, never authenticate: user ids and provider
names are fine, token strings and passwords are not. As a second line
of defence the scrubber below masks attributes whose names look like
credentials.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from jwtauth.config import ObservabilitySettings, Settings

# Regexes matched against attribute names, on top of logfire's defaults
CREDENTIAL_ATTRIBUTE_PATTERNS = [
    "access_token",
    "refresh_token",
    "id_token",
    "password_hash",
]


def _should_send(observability: ObservabilitySettings) -> bool:
    """Explicit flag first, then token presence."""
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure logfire once per process.

    Export to Logfire cloud is enabled by OBSERVABILITY__LOGFIRE_TOKEN
    unless OBSERVABILITY__SEND_TO_LOGFIRE says otherwise; the console
    exporter is always on outside tests.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send_to_logfire = _should_send(observability)

    logfire.configure(
        service_name=observability.service_name,
        service_version=settings.version,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=observability.logfire_token,
        console=(
            False
            if settings.environment == "test"
            else logfire.ConsoleOptions(
                colors="auto",
                span_style="show-parents",
                include_timestamps=True,
                verbose=settings.debug,
            )
        ),
        scrubbing=logfire.ScrubbingOptions(
            extra_patterns=CREDENTIAL_ATTRIBUTE_PATTERNS
        ),
    )

    logfire.info(
        "Logfire configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request.

    Headers are left out of spans since ``Authorization`` carries the
    bearer token; request bodies are never captured.
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        excluded_urls="/health",
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace statements issued by the user repository."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace outbound provider calls (Naver userinfo)."""
    logfire.instrument_httpx()


def instrument_redis() -> None:
    """Trace session store commands without their arguments.

    Values are refresh tokens, so statements are not captured.
    """
    logfire.instrument_redis(capture_statement=False)
