"""User response model shared by the user use cases."""

from datetime import datetime

from remark.application.usecase.base import ApiModel
from remark.domain.model import User


class UserResponse(ApiModel):
    """Public view of a user; the password hash is never included."""

    uid: str
    username: str
    email: str
    role: str
    created_at: datetime | None
    updated_at: datetime | None
    last_login_at: datetime | None

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            uid=user.username,
            username=user.username,
            email=user.email,
            role=user.role.value,
            created_at=user.created_at,
            updated_at=user.updated_at,
            last_login_at=user.last_login_at,
        )
