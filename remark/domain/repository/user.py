"""User repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from remark.domain.model.user import User
from remark.domain.value import Username


class UserRepository(ABC):
    """Repository for User entity.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by username.

        Args:
            username: The user's unique name

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, user: User) -> bool:
        """Save a new user unless the username is taken.

        Check and write are one transaction, so of two racing creations
        with the same username exactly one succeeds.

        Args:
            user: The user to save

        Returns:
            True if saved, False if the username already exists
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> Optional[User]:
        """Replace an existing user record.

        Args:
            user: The updated user

        Returns:
            The saved user, or None if no record exists under its username
        """
        pass

    @abstractmethod
    async def touch_login(self, username: Username, when: datetime) -> bool:
        """Record a successful login.

        Args:
            username: The user's name
            when: Login time

        Returns:
            False if the user no longer exists
        """
        pass

    @abstractmethod
    async def delete(self, username: Username) -> bool:
        """Delete a user.

        Args:
            username: The user's name

        Returns:
            True if a user was deleted, False if none existed
        """
        pass
