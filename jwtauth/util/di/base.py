"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure components that tests can swap for in-memory doubles
Component = Literal["naver", "persistence", "session_store"]


class ProviderBase(Provider):
    """Base for all DI providers.

    A provider class with subclasses is a mockable component; its
    subclasses are the production and mock implementations.

    Attributes:
        __mock_component__: Component name, None for concrete providers
        __is_mock__: Whether this is the mock implementation
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
