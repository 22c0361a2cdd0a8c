"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum
from typing import Literal, Union

from forum.domain.value.common import ValueObject


class Role(str, Enum):
    """User role.

    Administrators moderate: they may delete any comment.
    """

    USER = "USER"
    ADMIN = "ADMIN"


class Action(str, Enum):
    """Mutation kinds checked by the authorization guard."""

    CREATE = "create"
    UPVOTE = "upvote"
    DELETE = "delete"


class SortMode(str, Enum):
    """Ordering policy for sibling comments.

    TOP sorts by upvotes, newest first among equal upvotes.
    NEW sorts by creation time only, newest first.
    """

    TOP = "top"
    NEW = "new"

    @classmethod
    def parse(cls, value: str | None) -> "SortMode":
        """Parse a ``sortBy`` query value.

        Missing means TOP. Anything other than ``"top"`` means NEW.
        """
        if value is None or value == cls.TOP.value:
            return cls.TOP
        return cls.NEW


class Allow(ValueObject):
    """Guard decision permitting a mutation."""

    allowed: Literal[True] = True


class Deny(ValueObject):
    """Guard decision refusing a mutation, with the reason shown to the caller."""

    reason: str
    allowed: Literal[False] = False


Decision = Union[Allow, Deny]
