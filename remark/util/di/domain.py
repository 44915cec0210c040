"""Domain layer DI providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from remark.config import CommentSettings, Settings
from remark.domain.repository import CommentRepository, LikeRepository, UserRepository
from remark.domain.service import (
    CommentService,
    LikeAggregator,
    PasswordService,
    UserService,
)
from remark.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are APP-scoped: they hold no per-request state, and the
    like aggregator keeps the registry of background refreshes for the
    whole process.
    """

    scope = Scope.APP

    @provide
    def get_password_service(self) -> PasswordService:
        """Provide password hashing service."""
        return PasswordService()

    @provide
    def get_user_service(
        self,
        user_repository: UserRepository,
        password_service: PasswordService,
        settings: Settings,
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository,
            password_service=password_service,
            admin_username=settings.admin_username,
        )

    @provide
    async def get_like_aggregator(
        self,
        like_repository: LikeRepository,
        comment_repository: CommentRepository,
        settings: CommentSettings,
    ) -> AsyncIterator[LikeAggregator]:
        """Provide like aggregator; background refreshes finish before shutdown."""
        like_aggregator = LikeAggregator(
            like_repository=like_repository,
            comment_repository=comment_repository,
            max_recursion_depth=settings.max_recursion_depth,
        )
        yield like_aggregator
        await like_aggregator.drain()

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        like_aggregator: LikeAggregator,
        user_service: UserService,
        settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            like_aggregator=like_aggregator,
            user_service=user_service,
            stale_after_seconds=settings.stale_after_seconds,
        )
