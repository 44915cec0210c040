"""User domain service."""

import logfire

from remark.domain.error import ConflictError, NotFoundError, UnauthorizedError
from remark.domain.model import User
from remark.domain.repository import UserRepository
from remark.domain.value import Rule, UserRole, Username, require, validate
from remark.util.clock import utcnow

from .base import Service
from .password_service import PasswordService

LOGIN_FAILED = "username or password wrong"


class UserService(Service):
    """Domain service for user operations."""

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordService,
        admin_username: str | None = None,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            password_service: Password hashing service
            admin_username: Username that gets the admin role on registration
        """
        self.user_repository = user_repository
        self.password_service = password_service
        self.admin_username = admin_username

    def _role_for(self, username: str) -> UserRole:
        if self.admin_username and username == self.admin_username:
            return UserRole.ADMIN
        return UserRole.USER

    async def register(self, username: str, email: str, password: str) -> User:
        """Register a new user.

        Args:
            username: Requested username
            email: Email address
            password: Plain-text password

        Returns:
            Created user

        Raises:
            ValidationError: If any field fails validation
            ConflictError: If the username is taken
        """
        username = Username(require(username, Rule.USERNAME, "username"))
        email = require(email, Rule.EMAIL, "email")
        password = require(password, Rule.PASSWORD, "password")

        with logfire.span("user_service.register", username=username):
            now = utcnow()
            user = User(
                username=username,
                email=email,
                password=await self.password_service.hash(password),
                role=self._role_for(username),
                created_at=now,
                updated_at=now,
                last_login_at=None,
            )

            if not await self.user_repository.create(user):
                logfire.warn("Username already registered", username=username)
                raise ConflictError("User", username)

            logfire.info("User registered", username=username, role=user.role.value)
            return user

    async def login(self, username: str, password: str) -> User:
        """Check credentials and record the login.

        Every failure raises the same error, whether the username is
        malformed, unknown, or the password is wrong.

        Args:
            username: Username
            password: Plain-text password

        Returns:
            The logged-in user

        Raises:
            UnauthorizedError: If the credentials do not match
        """
        if not validate(username, Rule.USERNAME) or not isinstance(password, str):
            raise UnauthorizedError(LOGIN_FAILED)

        username = Username(username.strip())
        password = password.strip()

        with logfire.span("user_service.login", username=username):
            user = await self.user_repository.find_by_username(username)
            if user is None:
                await self.password_service.burn(password)
                logfire.info("Login for unknown user", username=username)
                raise UnauthorizedError(LOGIN_FAILED)

            if not await self.password_service.verify(password, user.password_hash):
                logfire.info("Login with wrong password", username=username)
                raise UnauthorizedError(LOGIN_FAILED)

            now = utcnow()
            if not await self.user_repository.touch_login(username, now):
                logfire.info("User deleted during login", username=username)
                raise UnauthorizedError(LOGIN_FAILED)
            logfire.info("User logged in", username=username)
            return user.model_copy(update={"last_login_at": now})

    async def logout(self, username: str) -> None:
        """Acknowledge a logout.

        No server-side session exists, so there is nothing to revoke.

        Raises:
            ValidationError: If the username is malformed
        """
        username = require(username, Rule.USERNAME, "username")
        logfire.info("User logged out", username=username)

    async def get_profile(self, username: str) -> User:
        """Get user by username.

        Args:
            username: Username

        Returns:
            User entity

        Raises:
            ValidationError: If the username is malformed
            NotFoundError: If user not found
        """
        username = Username(require(username, Rule.USERNAME, "username"))
        with logfire.span("user_service.get_profile", username=username):
            user = await self.user_repository.find_by_username(username)
            if not user:
                logfire.warn("User not found", username=username)
                raise NotFoundError("User", username)
            return user

    async def update(
        self,
        username: str,
        email: str | None = None,
        password: str | None = None,
        new_username: str | None = None,
    ) -> User:
        """Update profile fields; omitted fields keep their value.

        A new username moves the record to the new key.

        Returns:
            The updated user

        Raises:
            ValidationError: If any given field fails validation
            NotFoundError: If the user does not exist
            ConflictError: If new_username is taken
        """
        user = await self.get_profile(username)

        changes: dict = {"updated_at": utcnow()}
        if email is not None:
            changes["email"] = require(email, Rule.EMAIL, "email")
        if password is not None:
            changes["password_hash"] = await self.password_service.hash(
                require(password, Rule.PASSWORD, "password")
            )
        if new_username is not None:
            new_username = require(new_username, Rule.USERNAME, "newUsername")
            if new_username != user.username:
                changes["username"] = Username(new_username)

        with logfire.span(
            "user_service.update",
            username=user.username,
            fields=sorted(k for k in changes if k != "updated_at"),
        ):
            updated = user.model_copy(update=changes)

            if updated.username != user.username:
                if not await self.user_repository.create(updated):
                    logfire.warn(
                        "Rename target already taken",
                        username=user.username,
                        new_username=updated.username,
                    )
                    raise ConflictError("User", updated.username)
                await self.user_repository.delete(user.username)
                logfire.info(
                    "User renamed", username=user.username, new_username=updated.username
                )
                return updated

            if await self.user_repository.save(updated) is None:
                raise NotFoundError("User", user.username)
            logfire.info("User updated", username=user.username)
            return updated

    async def delete(self, username: str) -> None:
        """Delete a user.

        Raises:
            ValidationError: If the username is malformed
            NotFoundError: If the user does not exist
        """
        username = Username(require(username, Rule.USERNAME, "username"))
        with logfire.span("user_service.delete", username=username):
            if not await self.user_repository.delete(username):
                logfire.warn("User not found for delete", username=username)
                raise NotFoundError("User", username)
            logfire.info("User deleted", username=username)

    async def is_admin(self, username: str | None) -> bool:
        """Whether a username belongs to an admin. Unknown users are not."""
        if not validate(username, Rule.USERNAME):
            return False
        user = await self.user_repository.find_by_username(Username(username.strip()))
        return bool(user and user.is_admin)
