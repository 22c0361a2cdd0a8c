"""Application layer DI providers."""

from dishka import Scope, provide

from forum.application.usecase.auth import GetCurrentUserUseCase
from forum.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentTreeUseCase,
    ListCommentsUseCase,
    UpvoteCommentUseCase,
)
from forum.config import CommentSettings
from forum.domain.service import CommentService, IdentityService
from forum.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, identity_service: IdentityService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(identity_service=identity_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_upvote_comment_use_case(
        self, comment_service: CommentService
    ) -> UpvoteCommentUseCase:
        """Provide upvote comment use case."""
        return UpvoteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_list_comments_use_case(
        self, comment_service: CommentService, settings: CommentSettings
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(comment_service=comment_service, settings=settings)

    @provide(scope=Scope.REQUEST)
    def get_comment_tree_use_case(
        self, comment_service: CommentService, settings: CommentSettings
    ) -> GetCommentTreeUseCase:
        """Provide get comment tree use case."""
        return GetCommentTreeUseCase(comment_service=comment_service, settings=settings)
