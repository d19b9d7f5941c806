"""Domain layer errors.

Every domain error carries a stable ``ErrorCode`` so the interface layer
can render it without knowing the concrete exception type.
"""

from enum import Enum


class ErrorCode(Enum):
    """Stable error codes exposed to API clients."""

    USER_NOT_FOUND = (404, "U001", "User not found")
    DUPLICATE_EMAIL = (409, "U002", "Email is already registered")
    DUPLICATE_NICKNAME = (409, "U003", "Nickname is already taken")
    INVALID_CREDENTIALS = (401, "U004", "Invalid email or password")
    INVALID_EMAIL_FORMAT = (400, "U005", "Invalid email format")
    INVALID_NICKNAME_LENGTH = (400, "U006", "Nickname must be 2-20 characters")
    INVALID_PASSWORD_FORMAT = (400, "U007", "Password must be 8-64 characters")
    IDENTITY_ALREADY_LINKED = (409, "U008", "Provider is already linked to this user")
    INVALID_TOKEN = (401, "A001", "Invalid token")
    EXPIRED_TOKEN = (401, "A002", "Token has expired")
    UNSUPPORTED_PROVIDER = (400, "O001", "Unsupported identity provider")

    def __init__(self, status: int, code: str, message: str) -> None:
        self.status = status
        self.code = code
        self.message = message


class DomainError(Exception):
    """Base domain error."""

    error_code: ErrorCode

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(detail or self.error_code.message)

    @property
    def message(self) -> str:
        """Client-facing message."""
        return self.detail or self.error_code.message


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class InvalidEmailFormatError(ValidationError):
    """Email does not match the accepted address format."""

    error_code = ErrorCode.INVALID_EMAIL_FORMAT

    def __init__(self, email: str | None) -> None:
        self.email = email
        super().__init__(f"Invalid email format: {email}")


class InvalidNicknameLengthError(ValidationError):
    """Nickname is outside the allowed length."""

    error_code = ErrorCode.INVALID_NICKNAME_LENGTH

    def __init__(self, nickname: str) -> None:
        self.nickname = nickname
        super().__init__(f"Nickname must be 2-20 characters: {nickname!r}")


class InvalidPasswordFormatError(ValidationError):
    """Password violates the password policy.

    The password itself is never echoed.
    """

    error_code = ErrorCode.INVALID_PASSWORD_FORMAT

    def __init__(self) -> None:
        super().__init__()


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class DuplicateEmailError(BusinessRuleViolationError):
    """Email is already registered to another user."""

    error_code = ErrorCode.DUPLICATE_EMAIL

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email is already registered: {email}")


class DuplicateNicknameError(BusinessRuleViolationError):
    """Nickname is already used by another user."""

    error_code = ErrorCode.DUPLICATE_NICKNAME

    def __init__(self, nickname: str) -> None:
        self.nickname = nickname
        super().__init__(f"Nickname is already taken: {nickname}")


class IdentityAlreadyLinkedError(BusinessRuleViolationError):
    """A user already owns an identity for this provider, or the
    (provider, provider_id) pair belongs to someone else."""

    error_code = ErrorCode.IDENTITY_ALREADY_LINKED

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"Provider is already linked: {provider}")


class InvalidCredentialsError(DomainError):
    """Login failed.

    Unknown email, missing local identity and wrong password all raise
    this same error with the same message.
    """

    error_code = ErrorCode.INVALID_CREDENTIALS

    def __init__(self) -> None:
        super().__init__()


class InvalidTokenError(DomainError):
    """Token is forged, malformed, or does not match the stored session."""

    error_code = ErrorCode.INVALID_TOKEN


class ExpiredTokenError(DomainError):
    """Token signature is valid but it has expired.

    Attributes:
        claims: Verified claims of the expired token
    """

    error_code = ErrorCode.EXPIRED_TOKEN

    def __init__(self, claims: dict | None = None) -> None:
        self.claims = claims or {}
        super().__init__()


class UnsupportedProviderError(DomainError):
    """Identity provider key is not registered.

    The rejected key is kept on the instance but never echoed to clients.
    """

    error_code = ErrorCode.UNSUPPORTED_PROVIDER

    def __init__(self, provider_key: str) -> None:
        self.provider_key = provider_key
        super().__init__()


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    error_code = ErrorCode.USER_NOT_FOUND

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UserNotFoundError(NotFoundError):
    """User referenced by a token or session no longer exists."""

    def __init__(self, identifier: str) -> None:
        super().__init__("User", identifier)
