"""Application layer DI providers."""

from dishka import Scope, provide

from remark.application.usecase.comment import (
    AddCommentUseCase,
    DeleteCommentUseCase,
    EditCommentUseCase,
    GetCommentUseCase,
    ListCommentsUseCase,
    PropagateLikesUseCase,
    RecomputeLikesUseCase,
)
from remark.application.usecase.like import (
    GetLikeCountUseCase,
    HasLikedUseCase,
    LikeArticleUseCase,
    LikeCommentUseCase,
    UnlikeArticleUseCase,
    UnlikeCommentUseCase,
)
from remark.application.usecase.user import (
    DeleteUserUseCase,
    GetUserProfileUseCase,
    LoginUseCase,
    LogoutUseCase,
    RegisterUseCase,
    UpdateUserProfileUseCase,
)
from remark.domain.service import CommentService, LikeAggregator, UserService
from remark.interface.api.dispatcher import Dispatcher
from remark.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Comment use cases
    @provide
    def get_add_comment_use_case(
        self, comment_service: CommentService
    ) -> AddCommentUseCase:
        """Provide add comment use case."""
        return AddCommentUseCase(comment_service=comment_service)

    @provide
    def get_list_comments_use_case(
        self, comment_service: CommentService
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(comment_service=comment_service)

    @provide
    def get_get_comment_use_case(
        self, comment_service: CommentService
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(comment_service=comment_service)

    @provide
    def get_edit_comment_use_case(
        self, comment_service: CommentService
    ) -> EditCommentUseCase:
        """Provide edit comment use case."""
        return EditCommentUseCase(comment_service=comment_service)

    @provide
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide
    def get_recompute_likes_use_case(
        self, like_aggregator: LikeAggregator
    ) -> RecomputeLikesUseCase:
        """Provide recompute likes use case."""
        return RecomputeLikesUseCase(like_aggregator=like_aggregator)

    @provide
    def get_propagate_likes_use_case(
        self, like_aggregator: LikeAggregator
    ) -> PropagateLikesUseCase:
        """Provide propagate likes use case."""
        return PropagateLikesUseCase(like_aggregator=like_aggregator)

    # Like use cases
    @provide
    def get_like_article_use_case(
        self, like_aggregator: LikeAggregator
    ) -> LikeArticleUseCase:
        """Provide like article use case."""
        return LikeArticleUseCase(like_aggregator=like_aggregator)

    @provide
    def get_unlike_article_use_case(
        self, like_aggregator: LikeAggregator
    ) -> UnlikeArticleUseCase:
        """Provide unlike article use case."""
        return UnlikeArticleUseCase(like_aggregator=like_aggregator)

    @provide
    def get_like_comment_use_case(
        self, like_aggregator: LikeAggregator
    ) -> LikeCommentUseCase:
        """Provide like comment use case."""
        return LikeCommentUseCase(like_aggregator=like_aggregator)

    @provide
    def get_unlike_comment_use_case(
        self, like_aggregator: LikeAggregator
    ) -> UnlikeCommentUseCase:
        """Provide unlike comment use case."""
        return UnlikeCommentUseCase(like_aggregator=like_aggregator)

    @provide
    def get_has_liked_use_case(self, like_aggregator: LikeAggregator) -> HasLikedUseCase:
        """Provide has-liked use case."""
        return HasLikedUseCase(like_aggregator=like_aggregator)

    @provide
    def get_like_count_use_case(
        self, like_aggregator: LikeAggregator
    ) -> GetLikeCountUseCase:
        """Provide like count use case."""
        return GetLikeCountUseCase(like_aggregator=like_aggregator)

    # User use cases
    @provide
    def get_register_use_case(self, user_service: UserService) -> RegisterUseCase:
        """Provide register use case."""
        return RegisterUseCase(user_service=user_service)

    @provide
    def get_login_use_case(self, user_service: UserService) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(user_service=user_service)

    @provide
    def get_logout_use_case(self, user_service: UserService) -> LogoutUseCase:
        """Provide logout use case."""
        return LogoutUseCase(user_service=user_service)

    @provide
    def get_user_profile_use_case(
        self, user_service: UserService
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(user_service=user_service)

    @provide
    def get_update_user_profile_use_case(
        self, user_service: UserService
    ) -> UpdateUserProfileUseCase:
        """Provide update user profile use case."""
        return UpdateUserProfileUseCase(user_service=user_service)

    @provide
    def get_delete_user_use_case(self, user_service: UserService) -> DeleteUserUseCase:
        """Provide delete user use case."""
        return DeleteUserUseCase(user_service=user_service)

    # Dispatcher
    @provide
    def get_dispatcher(
        self,
        add_comment: AddCommentUseCase,
        list_comments: ListCommentsUseCase,
        get_comment: GetCommentUseCase,
        edit_comment: EditCommentUseCase,
        delete_comment: DeleteCommentUseCase,
        recompute_likes: RecomputeLikesUseCase,
        propagate_likes: PropagateLikesUseCase,
        like_article: LikeArticleUseCase,
        unlike_article: UnlikeArticleUseCase,
        like_comment: LikeCommentUseCase,
        unlike_comment: UnlikeCommentUseCase,
        has_liked: HasLikedUseCase,
        like_count: GetLikeCountUseCase,
        register: RegisterUseCase,
        login: LoginUseCase,
        logout: LogoutUseCase,
        get_user_profile: GetUserProfileUseCase,
        update_user_profile: UpdateUserProfileUseCase,
        delete_user: DeleteUserUseCase,
    ) -> Dispatcher:
        """Provide the request dispatcher."""
        return Dispatcher(
            add_comment=add_comment,
            list_comments=list_comments,
            get_comment=get_comment,
            edit_comment=edit_comment,
            delete_comment=delete_comment,
            recompute_likes=recompute_likes,
            propagate_likes=propagate_likes,
            like_article=like_article,
            unlike_article=unlike_article,
            like_comment=like_comment,
            unlike_comment=unlike_comment,
            has_liked=has_liked,
            like_count=like_count,
            register=register,
            login=login,
            logout=logout,
            get_user_profile=get_user_profile,
            update_user_profile=update_user_profile,
            delete_user=delete_user,
        )
