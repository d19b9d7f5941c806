"""Dependency injection wiring.

``PROVIDERS`` lists one entry per concern. A concrete provider is used
as-is; a provider base with subclasses is a swappable component whose
subclasses are its production and mock implementations.
"""

from typing import Type

from jwtauth.util.di.application import ProdApplicationProvider
from jwtauth.util.di.base import Component, ProviderBase
from jwtauth.util.di.core import ProdConfigProvider
from jwtauth.util.di.domain import ProdDomainProvider
from jwtauth.util.di.infrastructure import (
    NaverProvider,
    PersistenceProvider,
    ProdNaverProvider,
    ProdPersistenceProvider,
    ProdSessionStoreProvider,
    SessionStoreProvider,
)
from jwtauth.util.error import DependencyInjectionError

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
    SessionStoreProvider,
    NaverProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve the provider class to instantiate for ``base``.

    Args:
        base: Entry from ``PROVIDERS``
        use_mock: Pick the ``__is_mock__`` implementation of a component

    Raises:
        DependencyInjectionError: If the component has no implementation
            of the requested kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if impl.__is_mock__ is use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise DependencyInjectionError(
        f"No {kind} implementation registered for "
        f"{base.__mock_component__ or base.__name__}"
    )


__all__ = [
    "Component",
    "PROVIDERS",
    "ProviderBase",
    "get_provider",
    "NaverProvider",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdNaverProvider",
    "ProdPersistenceProvider",
    "ProdSessionStoreProvider",
    "SessionStoreProvider",
]
