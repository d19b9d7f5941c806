"""Domain services."""

from .base import Service
from .identity_normalizer import IdentityNormalizer, merge_id_token_subject
from .identity_reconciler import IdentityReconciler
from .jwt_service import JWTService
from .password_service import PasswordService
from .session_service import SessionService
from .user_service import UserService

__all__ = [
    "IdentityNormalizer",
    "IdentityReconciler",
    "JWTService",
    "PasswordService",
    "Service",
    "SessionService",
    "UserService",
    "merge_id_token_subject",
]
