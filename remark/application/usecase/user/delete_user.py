"""Delete user use case."""

from pydantic import AliasChoices, Field

from remark.application.usecase.base import ApiModel, BaseUseCase
from remark.domain.service import UserService


class DeleteUserRequest(ApiModel):
    """Delete user request."""

    username: str | None = Field(
        default=None, validation_alias=AliasChoices("username", "userId")
    )


class DeleteUserResponse(ApiModel):
    """Delete user response."""

    username: str
    deleted: bool = True


class DeleteUserUseCase(BaseUseCase):
    """Use case for deleting an account."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize delete user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: DeleteUserRequest) -> DeleteUserResponse:
        await self.user_service.delete(request.username)
        return DeleteUserResponse(username=request.username.strip())
