"""Response items shared by the comment use cases."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from forum.domain.error import ValidationError
from forum.domain.model import AuthorSummary, User
from forum.domain.service import CommentNode, CommentSummary
from forum.domain.value import CommentId, Role

INVALID_COMMENT_ID = "Valid comment ID is required"
# comments.id is a 32-bit INTEGER column
MAX_COMMENT_ID = 2**31 - 1


class AuthorInfo(BaseModel):
    """Public author fields embedded in a comment."""

    id: str
    name: str
    email: str | None
    avatar: str | None
    role: Role

    @classmethod
    def from_author(cls, author: AuthorSummary | User | None) -> "AuthorInfo | None":
        if author is None:
            return None
        return cls(
            id=author.id,
            name=author.name,
            email=author.email,
            avatar=author.avatar,
            role=author.role,
        )


class UserProfile(AuthorInfo):
    """Public profile of the requesting user."""

    created_at: datetime


class CommentItem(BaseModel):
    """Comment item in response."""

    id: int
    text: str
    upvotes: int
    created_at: datetime
    parent_id: int | None
    user_id: str
    user: AuthorInfo | None
    reply_count: int

    @classmethod
    def from_summary(cls, summary: CommentSummary) -> "CommentItem":
        comment = summary.comment
        return cls(
            id=comment.id,
            text=comment.text,
            upvotes=comment.upvotes,
            created_at=comment.created_at,
            parent_id=comment.parent_id,
            user_id=comment.author_id,
            user=AuthorInfo.from_author(summary.author),
            reply_count=summary.reply_count,
        )


class CommentTreeItem(CommentItem):
    """Comment with its replies nested to full depth."""

    replies: list["CommentTreeItem"] = Field(default_factory=list)

    @classmethod
    def from_node(cls, root: CommentNode) -> "CommentTreeItem":
        """Convert an assembled thread, walking it with an explicit stack."""
        root_item = cls._from_single_node(root)
        stack = [(root, root_item)]
        while stack:
            node, item = stack.pop()
            for reply in node.replies:
                reply_item = cls._from_single_node(reply)
                item.replies.append(reply_item)
                stack.append((reply, reply_item))
        return root_item

    @classmethod
    def _from_single_node(cls, node: CommentNode) -> "CommentTreeItem":
        comment = node.comment
        return cls(
            id=comment.id,
            text=comment.text,
            upvotes=comment.upvotes,
            created_at=comment.created_at,
            parent_id=comment.parent_id,
            user_id=comment.author_id,
            user=AuthorInfo.from_author(node.author),
            reply_count=node.reply_count,
        )


def parse_comment_id(value: Any) -> CommentId:
    """Parse a comment ID given as a path segment or JSON value.

    Raises:
        ValidationError: If the value is not a positive integer that fits
            the comment id column
    """
    if isinstance(value, bool):
        raise ValidationError(INVALID_COMMENT_ID)
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and value.strip().isdecimal():
        try:
            parsed = int(value.strip())
        except ValueError:
            # Past the interpreter limit on integer string length
            raise ValidationError(INVALID_COMMENT_ID)
    else:
        raise ValidationError(INVALID_COMMENT_ID)
    if parsed < 1 or parsed > MAX_COMMENT_ID:
        raise ValidationError(INVALID_COMMENT_ID)
    return CommentId(parsed)
