"""PostgreSQL implementation of User repository."""

from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import User
from forum.domain.repository import UserRepository
from forum.domain.value import UserId
from forum.persistence.database import store_errors
from forum.persistence.mappers import row_to_user
from forum.persistence.tables import users_table

# Everything except the password hash
_PUBLIC_COLUMNS = [
    users_table.c.id,
    users_table.c.name,
    users_table.c.email,
    users_table.c.avatar,
    users_table.c.role,
    users_table.c.created_at,
]


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(*_PUBLIC_COLUMNS).where(users_table.c.id == user_id)
        with store_errors("find_user_by_id"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(row) if row else None

    async def find_by_ids(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Find several users with a single query."""
        ids = set(user_ids)
        if not ids:
            return {}

        stmt = select(*_PUBLIC_COLUMNS).where(users_table.c.id.in_(ids))
        with store_errors("find_users_by_ids"):
            result = await self.session.execute(stmt)
        users = [row_to_user(row) for row in result.mappings().all()]
        return {user.id: user for user in users}
