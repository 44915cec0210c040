"""Get user profile use case."""

from pydantic import AliasChoices, Field

from remark.application.usecase.base import ApiModel, BaseUseCase
from remark.domain.service import UserService

from .common import UserResponse


class GetUserProfileRequest(ApiModel):
    """Get user profile request."""

    username: str | None = Field(
        default=None, validation_alias=AliasChoices("username", "userId")
    )


class GetUserProfileUseCase(BaseUseCase):
    """Use case for getting a user's profile."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get user profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetUserProfileRequest) -> UserResponse:
        """Execute get user profile flow.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.user_service.get_profile(request.username)
        return UserResponse.from_domain(user)
