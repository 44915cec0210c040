"""User aggregate root.

Users register with a username and password; the username is the store
key. The password hash is persisted under "password" and never returned.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from remark.domain.model.common import DomainModel
from remark.domain.value import UserRole, Username


class User(DomainModel):
    """Registered user."""

    username: Username
    email: str
    password_hash: str = Field(alias="password", repr=False)
    role: UserRole = UserRole.USER
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
