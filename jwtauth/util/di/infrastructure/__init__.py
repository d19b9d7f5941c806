"""Swappable infrastructure components.

Production subclasses are imported here so that ``__subclasses__()``
sees them as soon as the bases are.
"""

from .naver import NaverProvider, ProdNaverProvider
from .persistence import PersistenceProvider, ProdPersistenceProvider
from .session_store import ProdSessionStoreProvider, SessionStoreProvider

__all__ = [
    "NaverProvider",
    "PersistenceProvider",
    "ProdNaverProvider",
    "ProdPersistenceProvider",
    "ProdSessionStoreProvider",
    "SessionStoreProvider",
]
