"""Comment routes."""

from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, status
from pydantic import BaseModel

from forum.application.usecase.comment import (
    CommentTreeItem,
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentTreeRequest,
    GetCommentTreeUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
    UpvoteCommentRequest,
    UpvoteCommentResponse,
    UpvoteCommentUseCase,
)
from forum.domain.error import DomainError
from forum.domain.service import IdentityService
from forum.interface.error import raise_http_error

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment.

    Text is validated by the comment service so that a missing, blank or
    non-string text is reported as "Text is required" rather than a schema
    error.
    """

    text: Any = None
    parent_id: Any = None  # Parent comment ID for replies


@router.post(
    "/create",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    identity_service: FromDishka[IdentityService],
    request: CreateCommentAPIRequest | None = None,
    authorization: str | None = Header(default=None),
) -> CreateCommentResponse:
    """Create a root comment or reply to another comment.

    Requires authentication.

    Args:
        request: Comment creation data (a missing body counts as empty)
        create_comment_use_case: Create comment use case from DI
        identity_service: Bearer token verification (injected)
        authorization: Authorization header

    Returns:
        Created comment with its author

    Raises:
        HTTPException: If not authenticated or validation fails
    """
    try:
        identity = await identity_service.verify_bearer(authorization)
        request = request or CreateCommentAPIRequest()
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                identity=identity,
                text=request.text,
                parent_id=request.parent_id,
            )
        )
    except DomainError as e:
        raise_http_error(e, "create_comment")


@router.post("/{comment_id}/upvote", response_model=UpvoteCommentResponse)
async def upvote_comment(
    comment_id: str,
    upvote_comment_use_case: FromDishka[UpvoteCommentUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> UpvoteCommentResponse:
    """Add one upvote to a comment.

    Requires authentication. Repeated upvotes by the same user all count.
    """
    try:
        identity = await identity_service.verify_bearer(authorization)
        return await upvote_comment_use_case.execute(
            UpvoteCommentRequest(identity=identity, comment_id=comment_id)
        )
    except DomainError as e:
        raise_http_error(e, "upvote_comment")


@router.get("", response_model=ListCommentsResponse)
async def list_comments(
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    identity_service: FromDishka[IdentityService],
    sort_by: str | None = Query(default=None, alias="sortBy"),
    authorization: str | None = Header(default=None),
) -> ListCommentsResponse:
    """List root comments with reply counts.

    Args:
        list_comments_use_case: List comments use case from DI
        identity_service: Bearer token verification (injected)
        sort_by: "top" (default) or "new"
        authorization: Authorization header

    Returns:
        Root comments and the requesting user's profile
    """
    try:
        identity = await identity_service.verify_bearer(authorization)
        return await list_comments_use_case.execute(
            ListCommentsRequest(identity=identity, sort_by=sort_by)
        )
    except DomainError as e:
        raise_http_error(e, "list_comments")


@router.get("/{comment_id}", response_model=CommentTreeItem)
async def get_comment_tree(
    comment_id: str,
    get_comment_tree_use_case: FromDishka[GetCommentTreeUseCase],
    identity_service: FromDishka[IdentityService],
    sort_by: str | None = Query(default=None, alias="sortBy"),
    authorization: str | None = Header(default=None),
) -> CommentTreeItem:
    """Get a comment with all of its nested replies."""
    try:
        identity = await identity_service.verify_bearer(authorization)
        return await get_comment_tree_use_case.execute(
            GetCommentTreeRequest(
                identity=identity, comment_id=comment_id, sort_by=sort_by
            )
        )
    except DomainError as e:
        raise_http_error(e, "get_comment_tree")


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: str | None = Header(default=None),
) -> DeleteCommentResponse:
    """Delete a comment and every reply beneath it.

    Only the comment author or an administrator may delete.

    Raises:
        HTTPException: 403 if not permitted, 404 if the comment does not exist
    """
    try:
        identity = await identity_service.verify_bearer(authorization)
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(identity=identity, comment_id=comment_id)
        )
    except DomainError as e:
        raise_http_error(e, "delete_comment")
