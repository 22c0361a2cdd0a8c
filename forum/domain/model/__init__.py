"""Domain model entities for the forum."""

from forum.domain.model.comment import Comment
from forum.domain.model.identity import Identity
from forum.domain.model.user import AuthorSummary, User

__all__ = [
    "AuthorSummary",
    "Comment",
    "Identity",
    "User",
]
