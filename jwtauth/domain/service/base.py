"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold logic that spans the User aggregate, token
    issuance and the session store.
    """

    pass
