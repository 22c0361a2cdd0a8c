"""Upvote comment use case."""

from pydantic import BaseModel

from forum.domain.model import Identity
from forum.domain.service import CommentService

from .common import CommentItem, parse_comment_id


class UpvoteCommentRequest(BaseModel):
    """Upvote comment request."""

    identity: Identity
    comment_id: int | str


class UpvoteCommentResponse(CommentItem):
    """Upvote comment response."""

    pass


class UpvoteCommentUseCase:
    """Use case for upvoting a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize upvote comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpvoteCommentRequest) -> UpvoteCommentResponse:
        """Execute upvote flow.

        Raises:
            ValidationError: If the comment ID is malformed
            NotFoundError: If the comment does not exist
        """
        comment_id = parse_comment_id(request.comment_id)
        summary = await self.comment_service.upvote(request.identity, comment_id)
        return UpvoteCommentResponse.from_summary(summary)
