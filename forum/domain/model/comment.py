"""Comment entity.

Comments are threaded discussions with unlimited depth. The only link between
a reply and its parent is ``parent_id``; trees are assembled at read time.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import CommentId, UserId


class Comment(DomainModel):
    """Comment entity.

    Represents a root comment or a reply to another comment.

    - id: Assigned by the store, monotonically increasing
    - parent_id: Direct parent comment (None for root comments)
    - upvotes: Only ever incremented, one per accepted upvote
    """

    id: CommentId
    text: str = Field(min_length=1)
    author_id: UserId
    parent_id: Optional[CommentId] = None
    upvotes: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
