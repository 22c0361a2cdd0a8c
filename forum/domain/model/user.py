"""User entity and its public projection.

Users are owned by the identity provider. The forum only reads them, and never
sees their credentials.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import Role, UserId


class User(DomainModel):
    """Registered forum user."""

    id: UserId
    name: str
    email: Optional[str] = None
    avatar: Optional[str] = None
    role: Role = Role.USER
    created_at: datetime = Field(default_factory=datetime.now)


class AuthorSummary(DomainModel):
    """Author fields embedded in every comment returned to clients."""

    id: UserId
    name: str
    email: Optional[str] = None
    avatar: Optional[str] = None
    role: Role

    @classmethod
    def from_user(cls, user: User) -> "AuthorSummary":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            avatar=user.avatar,
            role=user.role,
        )
