"""Comment use cases."""

from .common import AuthorInfo, CommentItem, CommentTreeItem, UserProfile
from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_comment_tree import GetCommentTreeRequest, GetCommentTreeUseCase
from .list_comments import (
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)
from .upvote_comment import (
    UpvoteCommentRequest,
    UpvoteCommentResponse,
    UpvoteCommentUseCase,
)

__all__ = [
    "AuthorInfo",
    "CommentItem",
    "CommentTreeItem",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetCommentTreeRequest",
    "GetCommentTreeUseCase",
    "ListCommentsRequest",
    "ListCommentsResponse",
    "ListCommentsUseCase",
    "UpvoteCommentRequest",
    "UpvoteCommentResponse",
    "UpvoteCommentUseCase",
    "UserProfile",
]
