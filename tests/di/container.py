"""Container for tests: in-memory doubles unless a component is unmocked."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from jwtauth.config import Settings
from jwtauth.util.di import PROVIDERS, Component, get_provider


def mockable_components() -> set[Component]:
    """Names of the components that ship a mock implementation."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__ and base.__subclasses__()
    }


def build_test_container(
    unmock: set[Component] | None = None, settings: Settings | None = None
) -> AsyncContainer:
    """Wire every provider, mocking swappable components by default.

    Args:
        unmock: Components that get their production implementation,
            e.g. ``{"persistence", "session_store"}`` against live
            PostgreSQL and Redis
        settings: Settings to expose; read from the environment if omitted

    Raises:
        ValueError: If ``unmock`` names a component that has no mock
    """
    unmock = set(unmock or ())
    unknown = unmock - mockable_components()
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    providers = [
        get_provider(
            base,
            use_mock=bool(base.__mock_component__)
            and base.__mock_component__ not in unmock,
        )()
        for base in PROVIDERS
    ]

    return make_async_container(
        *providers,
        FastapiProvider(),
        context={Settings: settings or Settings()},
    )
