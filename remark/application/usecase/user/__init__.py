"""User use cases."""

from .common import UserResponse
from .delete_user import DeleteUserRequest, DeleteUserResponse, DeleteUserUseCase
from .get_user_profile import GetUserProfileRequest, GetUserProfileUseCase
from .login import (
    LoginRequest,
    LoginUseCase,
    LogoutRequest,
    LogoutResponse,
    LogoutUseCase,
)
from .register import RegisterRequest, RegisterUseCase
from .update_user_profile import UpdateUserProfileRequest, UpdateUserProfileUseCase

__all__ = [
    "DeleteUserRequest",
    "DeleteUserResponse",
    "DeleteUserUseCase",
    "GetUserProfileRequest",
    "GetUserProfileUseCase",
    "LoginRequest",
    "LoginUseCase",
    "LogoutRequest",
    "LogoutResponse",
    "LogoutUseCase",
    "RegisterRequest",
    "RegisterUseCase",
    "UpdateUserProfileRequest",
    "UpdateUserProfileUseCase",
    "UserResponse",
]
