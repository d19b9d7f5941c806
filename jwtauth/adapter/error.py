"""Infrastructure layer errors.

These are never mapped onto the domain error taxonomy; the API answers
them with 503.
"""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External identity provider error."""

    pass


class SessionStoreError(AdapterError):
    """Refresh session store is unreachable or rejected a command."""

    pass


class SessionStoreTimeoutError(SessionStoreError):
    """Refresh session store did not answer within the operation timeout."""

    pass
