"""FastAPI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jwtauth.config import Settings
from jwtauth.interface.api.error_handlers import register_exception_handlers
from jwtauth.interface.api.routes import auth, health
from jwtauth.util.di.container import create_container, setup_di
from jwtauth.util.observability import instrument_fastapi, instrument_httpx


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    # Disposes the database engine and the Redis pool
    await app.state.dishka_container.close()


def create_app(
    container: AsyncContainer | None = None, settings: Settings | None = None
) -> FastAPI:
    """Build the API.

    Logfire must already be configured (``scripts/start_app.py`` in
    production, ``tests/conftest.py`` under pytest).

    Args:
        container: DI container; the production one if omitted
        settings: Settings for app-level wiring such as CORS
    """
    settings = settings or Settings()

    app_instance = FastAPI(
        title="jwtauth",
        description="Token authentication with refresh rotation and federated identity",
        version=settings.version,
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)
    instrument_httpx()

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container(settings))
    register_exception_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)

    return app_instance


# Entry point for uvicorn (see scripts/start_app.py)
app = create_app()
