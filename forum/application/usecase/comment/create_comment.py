"""Create comment use case."""

from typing import Any

from pydantic import BaseModel

from forum.domain.model import Identity
from forum.domain.service import CommentService

from .common import CommentItem, parse_comment_id


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    identity: Identity  # Authenticated author
    text: Any = None  # Validated by the comment service
    parent_id: Any = None  # Parent comment ID for replies, int or numeric string


class CreateCommentResponse(CommentItem):
    """Create comment response."""

    pass


class CreateCommentUseCase:
    """Use case for creating a root comment or replying to another comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Falsy parent IDs (``None``, ``0``, ``""``) create a root comment.

        Args:
            request: Create comment request

        Returns:
            The created comment with its author

        Raises:
            ValidationError: If text is missing or the parent ID is malformed
        """
        parent_id = parse_comment_id(request.parent_id) if request.parent_id else None

        summary = await self.comment_service.create(
            identity=request.identity,
            text=request.text,
            parent_id=parent_id,
        )

        return CreateCommentResponse.from_summary(summary)
