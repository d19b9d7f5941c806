"""Production container assembly."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from jwtauth.config import Settings
from jwtauth.util.di import PROVIDERS, get_provider


def create_container(settings: Settings | None = None) -> AsyncContainer:
    """Build the container with every component's production provider.

    Args:
        settings: Settings to expose; read from the environment if omitted

    Returns:
        Container with PostgreSQL, Redis and the real Naver client
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(
        *providers,
        FastapiProvider(),
        context={Settings: settings or Settings()},
    )


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Serve route dependencies from ``container``.

    The app lifespan closes it on shutdown.
    """
    setup_dishka(container, app)
