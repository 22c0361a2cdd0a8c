"""Domain value objects for the forum."""

from forum.domain.value.identifiers import CommentId, UserId
from forum.domain.value.types import (
    Action,
    Allow,
    Decision,
    Deny,
    Role,
    SortMode,
)

__all__ = [
    # Identifiers
    "CommentId",
    "UserId",
    # Types
    "Action",
    "Allow",
    "Decision",
    "Deny",
    "Role",
    "SortMode",
]
