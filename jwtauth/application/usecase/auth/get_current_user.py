"""Get current user use case."""

from pydantic import BaseModel

from jwtauth.application.usecase.base import BaseUseCase
from jwtauth.domain.service import JWTService, UserService
from jwtauth.domain.value import UserId

from .common import UserResponse


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # Bearer access token


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for getting the authenticated user."""

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> UserResponse:
        """Resolve the access token and load its user.

        Raises:
            InvalidTokenError: If the token is not a valid access token
            ExpiredTokenError: If the access token expired
            UserNotFoundError: If the user was deleted
        """
        principal = self.jwt_service.authenticate(request.token)
        user = await self.user_service.get_by_id(UserId(principal.user_id))
        return UserResponse.from_user(user)
