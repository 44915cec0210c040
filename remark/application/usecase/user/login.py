"""Login and logout use cases."""

from pydantic import AliasChoices, Field

from remark.application.usecase.base import ApiModel, BaseUseCase
from remark.domain.service import UserService

from .common import UserResponse


class LoginRequest(ApiModel):
    """Login request."""

    username: str | None = Field(
        default=None, validation_alias=AliasChoices("username", "userId")
    )
    password: str | None = None


class LogoutRequest(ApiModel):
    """Logout request."""

    username: str | None = Field(
        default=None, validation_alias=AliasChoices("username", "userId")
    )


class LogoutResponse(ApiModel):
    """Logout response."""

    username: str
    logged_out: bool = True


class LoginUseCase(BaseUseCase):
    """Use case for checking a user's credentials.

    There are no sessions: a successful login returns the profile and
    records lastLoginAt, nothing more.
    """

    def __init__(self, user_service: UserService) -> None:
        """Initialize login use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: LoginRequest) -> UserResponse:
        """Execute login flow.

        Raises:
            UnauthorizedError: If the credentials do not match
        """
        user = await self.user_service.login(request.username, request.password)
        return UserResponse.from_domain(user)


class LogoutUseCase(BaseUseCase):
    """Use case for logging out."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize logout use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: LogoutRequest) -> LogoutResponse:
        await self.user_service.logout(request.username)
        return LogoutResponse(username=request.username.strip())
