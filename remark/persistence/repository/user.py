"""Store-backed implementation of User repository."""

from datetime import datetime
from typing import Optional

from remark.domain.model import User
from remark.domain.repository import UserRepository
from remark.domain.value import Username
from remark.persistence import paths
from remark.persistence.mappers import record_to_user, user_to_record
from remark.persistence.store import DELETE, Store


class StoreUserRepository(UserRepository):
    """UserRepository over the document store, one record per username."""

    def __init__(self, store: Store) -> None:
        """Initialize repository with the store adapter.

        Args:
            store: Store adapter
        """
        self.store = store

    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by username."""
        record = await self.store.read(paths.user(username))
        return record_to_user(record) if record else None

    async def create(self, user: User) -> bool:
        """Save a new user if the username is free."""
        record = user_to_record(user)
        result = await self.store.transact(
            paths.user(user.username),
            lambda current: None if current else record,
        )
        return result.committed

    async def save(self, user: User) -> Optional[User]:
        """Replace an existing user record."""
        record = user_to_record(user)
        result = await self.store.transact(
            paths.user(user.username),
            lambda current: record if current else None,
        )
        return user if result.committed else None

    async def touch_login(self, username: Username, when: datetime) -> bool:
        """Set lastLoginAt on an existing user record."""
        stamp = when.isoformat()
        result = await self.store.transact(
            paths.user(username),
            lambda current: {**current, "lastLoginAt": stamp} if current else None,
        )
        return result.committed

    async def delete(self, username: Username) -> bool:
        """Delete a user if present."""
        result = await self.store.transact(
            paths.user(username),
            lambda current: DELETE if current else None,
        )
        return result.committed
