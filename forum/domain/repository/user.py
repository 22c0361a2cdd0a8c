"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from forum.domain.model.user import User
from forum.domain.value import UserId


class UserRepository(ABC):
    """Read-only repository for users.

    Users are created and updated by the identity provider; the forum only
    looks them up.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Find several users at once.

        Args:
            user_ids: User IDs to look up

        Returns:
            Mapping of found user IDs to users (missing IDs are omitted)
        """
        pass
