"""Test configuration and fixtures."""

from datetime import datetime, timedelta

import logfire

from forum.config import AuthSettings
from forum.domain.model import Comment, Identity, User
from forum.domain.value import CommentId, Role, UserId
from forum.util.jwt import create_token

# Keep telemetry local during tests
logfire.configure(send_to_logfire=False, console=False)

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0)


def make_user(
    user_id: str = "user-1",
    name: str = "Test User",
    role: Role = Role.USER,
    email: str | None = None,
) -> User:
    """Build a user for seeding the in-memory store."""
    return User(
        id=UserId(user_id),
        name=name,
        email=email if email is not None else f"{user_id}@example.com",
        avatar=None,
        role=role,
        created_at=BASE_TIME,
    )


def make_comment(
    comment_id: int,
    author_id: str = "user-1",
    parent_id: int | None = None,
    upvotes: int = 0,
    minutes: int = 0,
    text: str | None = None,
) -> Comment:
    """Build a comment created ``minutes`` after BASE_TIME."""
    return Comment(
        id=CommentId(comment_id),
        text=text or f"Comment {comment_id}",
        author_id=UserId(author_id),
        parent_id=CommentId(parent_id) if parent_id is not None else None,
        upvotes=upvotes,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


def identity_of(user: User) -> Identity:
    """Identity for an already stored user."""
    return Identity(id=user.id, role=user.role)


def bearer_for(user_id: str, settings: AuthSettings | None = None) -> dict[str, str]:
    """Authorization header carrying a fresh token for ``user_id``."""
    token = create_token(user_id, settings or AuthSettings())
    return {"Authorization": f"Bearer {token}"}
