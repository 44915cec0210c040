"""Register use case."""

from remark.application.usecase.base import ApiModel, BaseUseCase
from remark.domain.service import UserService

from .common import UserResponse


class RegisterRequest(ApiModel):
    """Register request."""

    username: str | None = None
    email: str | None = None
    password: str | None = None


class RegisterUseCase(BaseUseCase):
    """Use case for creating an account."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize register use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: RegisterRequest) -> UserResponse:
        """Execute register flow.

        Raises:
            ValidationError: If a field fails validation
            ConflictError: If the username is taken
        """
        user = await self.user_service.register(
            request.username, request.email, request.password
        )
        return UserResponse.from_domain(user)
