"""Get comment tree use case."""

from pydantic import BaseModel

from forum.config import CommentSettings
from forum.domain.model import Identity
from forum.domain.service import CommentService
from forum.domain.value import SortMode

from .common import CommentTreeItem, parse_comment_id


class GetCommentTreeRequest(BaseModel):
    """Get comment tree request."""

    identity: Identity
    comment_id: int | str
    sort_by: str | None = None


class GetCommentTreeUseCase:
    """Use case for fetching a comment with every nested reply."""

    def __init__(
        self, comment_service: CommentService, settings: CommentSettings
    ) -> None:
        """Initialize get comment tree use case.

        Args:
            comment_service: Comment domain service
            settings: Comment settings (default sort mode)
        """
        self.comment_service = comment_service
        self.settings = settings

    async def execute(self, request: GetCommentTreeRequest) -> CommentTreeItem:
        """Execute get tree flow.

        Args:
            request: Get comment tree request

        Returns:
            Root comment with replies nested to full depth

        Raises:
            ValidationError: If the comment ID is malformed
            NotFoundError: If the comment does not exist
        """
        comment_id = parse_comment_id(request.comment_id)
        sort_by = (
            request.sort_by
            if request.sort_by is not None
            else self.settings.default_sort
        )

        tree = await self.comment_service.get_tree(
            request.identity, comment_id, SortMode.parse(sort_by)
        )
        return CommentTreeItem.from_node(tree)
