"""Delete comment use case."""

from pydantic import BaseModel

from forum.domain.model import Identity
from forum.domain.service import CommentService

from .common import parse_comment_id


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    identity: Identity
    comment_id: int | str


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    success: bool
    message: str


class DeleteCommentUseCase:
    """Use case for deleting a comment together with all of its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete flow.

        Args:
            request: Delete comment request

        Returns:
            Confirmation message

        Raises:
            ValidationError: If the comment ID is malformed
            NotFoundError: If the comment does not exist
            ForbiddenError: If the caller is neither the author nor an admin
        """
        comment_id = parse_comment_id(request.comment_id)
        await self.comment_service.delete(request.identity, comment_id)
        return DeleteCommentResponse(
            success=True, message="Comment deleted successfully"
        )
