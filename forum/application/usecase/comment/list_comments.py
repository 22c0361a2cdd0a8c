"""List root comments use case."""

from pydantic import BaseModel

from forum.config import CommentSettings
from forum.domain.model import Identity
from forum.domain.service import CommentService
from forum.domain.value import SortMode

from .common import CommentItem, UserProfile


class ListCommentsRequest(BaseModel):
    """List comments request."""

    identity: Identity
    sort_by: str | None = None  # "top" or "new"; configured default when absent


class ListCommentsResponse(BaseModel):
    """List comments response."""

    comments: list[CommentItem]
    current_user: UserProfile | None


class ListCommentsUseCase:
    """Use case for listing root comments with their reply counts."""

    def __init__(
        self, comment_service: CommentService, settings: CommentSettings
    ) -> None:
        """Initialize list comments use case.

        Args:
            comment_service: Comment domain service
            settings: Comment settings (default sort mode)
        """
        self.comment_service = comment_service
        self.settings = settings

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list flow."""
        sort_by = (
            request.sort_by
            if request.sort_by is not None
            else self.settings.default_sort
        )
        listing = await self.comment_service.list_roots(
            request.identity, SortMode.parse(sort_by)
        )

        current_user = None
        if listing.current_user is not None:
            user = listing.current_user
            current_user = UserProfile(
                id=user.id,
                name=user.name,
                email=user.email,
                avatar=user.avatar,
                role=user.role,
                created_at=user.created_at,
            )

        return ListCommentsResponse(
            comments=[CommentItem.from_summary(s) for s in listing.comments],
            current_user=current_user,
        )
