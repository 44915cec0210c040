"""Update user profile use case."""

from pydantic import AliasChoices, Field

from remark.application.usecase.base import ApiModel, BaseUseCase
from remark.domain.service import UserService

from .common import UserResponse


class UpdateUserProfileRequest(ApiModel):
    """Update user profile request.

    Fields left as None are not changed.
    """

    username: str | None = Field(
        default=None, validation_alias=AliasChoices("username", "userId")
    )
    email: str | None = None
    password: str | None = None
    new_username: str | None = None


class UpdateUserProfileUseCase(BaseUseCase):
    """Use case for updating a user's profile."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize update user profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: UpdateUserProfileRequest) -> UserResponse:
        """Execute update user profile flow.

        Raises:
            ValidationError: If a field fails validation
            NotFoundError: If the user does not exist
            ConflictError: If new_username is taken
        """
        user = await self.user_service.update(
            request.username,
            email=request.email,
            password=request.password,
            new_username=request.new_username,
        )
        return UserResponse.from_domain(user)
