"""Password hashing domain service."""

import asyncio

import logfire

from remark.util.password import BCRYPT_ROUNDS, hash_password, verify_password

from .base import Service


class PasswordService(Service):
    """Domain service for password hashing.

    bcrypt is deliberately slow, so hashing and checking run in a worker
    thread to keep the event loop free.
    """

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        """Initialize password service.

        Args:
            rounds: bcrypt cost factor
        """
        self.rounds = rounds
        self._dummy_hash: str | None = None

    async def hash(self, password: str) -> str:
        """Hash a password.

        Args:
            password: Plain-text password

        Returns:
            Salted bcrypt hash
        """
        with logfire.span("password_service.hash"):
            return await asyncio.to_thread(hash_password, password, self.rounds)

    async def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a hash.

        Args:
            password: Plain-text password
            password_hash: Stored hash

        Returns:
            True if the password matches
        """
        with logfire.span("password_service.verify"):
            return await asyncio.to_thread(verify_password, password, password_hash)

    async def burn(self, password: str) -> None:
        """Spend the time of one verification without a real hash.

        Used when the user does not exist, so response time does not tell
        whether a username is registered.
        """
        if self._dummy_hash is None:
            self._dummy_hash = await self.hash("remark-dummy-password")
        await self.verify(password, self._dummy_hash)
