"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Mapping

from forum.domain.model import Comment, User
from forum.domain.value import CommentId, Role, UserId


def row_to_user(row: Mapping[str, Any]) -> User:
    """Convert database row to User domain model.

    The password hash column is ignored even when present.

    Args:
        row: Database row as mapping

    Returns:
        User domain model
    """
    return User(
        id=UserId(str(row["id"])),
        name=row["name"],
        email=row.get("email"),
        avatar=row.get("avatar"),
        role=Role(row["role"]),
        created_at=row["created_at"],
    )


def row_to_comment(row: Mapping[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as mapping

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(row["id"]),
        text=row["text"],
        author_id=UserId(str(row["user_id"])),
        parent_id=CommentId(parent_id) if parent_id is not None else None,
        upvotes=row["upvotes"],
        created_at=row["created_at"],
    )

