"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Configuration error.

    Raised at startup when a component cannot be built from settings,
    e.g. a signing secret that is too short.
    """

    pass


class DependencyInjectionError(UtilError):
    """Dependency injection error."""

    pass
