"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from forum.domain.model.comment import Comment
from forum.domain.value import CommentId, SortMode, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_children(
        self,
        parent_id: CommentId,
        sort_mode: SortMode = SortMode.TOP,
    ) -> List[Comment]:
        """Find direct replies of a comment.

        Args:
            parent_id: The parent comment ID
            sort_mode: Ordering of the returned siblings

        Returns:
            List of child comments in sort order
        """
        pass

    @abstractmethod
    async def find_roots(self, sort_mode: SortMode = SortMode.TOP) -> List[Comment]:
        """Find all comments without a parent.

        Args:
            sort_mode: Ordering of the returned comments

        Returns:
            List of root comments in sort order
        """
        pass

    @abstractmethod
    async def find_subtree(self, root_id: CommentId) -> List[Comment]:
        """Find a comment and every transitive reply of it in one query.

        Each comment appears once, the root included. Implementations must
        terminate on cyclic parent links. No ordering is guaranteed.

        Args:
            root_id: The comment whose subtree to fetch

        Returns:
            Flat list of the subtree, empty if the root does not exist
        """
        pass

    @abstractmethod
    async def insert(
        self,
        text: str,
        author_id: UserId,
        parent_id: Optional[CommentId] = None,
    ) -> Comment:
        """Insert a new comment.

        The store assigns ``id`` and ``created_at``; ``upvotes`` starts at 0.

        Args:
            text: Comment text
            author_id: Author user ID
            parent_id: Parent comment for replies (None for root comments)

        Returns:
            The stored comment
        """
        pass

    @abstractmethod
    async def increment_upvotes(self, comment_id: CommentId) -> Optional[Comment]:
        """Atomically increment upvotes by 1.

        Args:
            comment_id: The comment ID

        Returns:
            The updated comment, or None if it does not exist
        """
        pass

    @abstractmethod
    async def delete_cascade(self, comment_id: CommentId) -> bool:
        """Delete a comment together with its whole reply subtree.

        The deletion is a single atomic operation.

        Args:
            comment_id: The comment ID to delete

        Returns:
            True if the comment existed and was removed
        """
        pass

    @abstractmethod
    async def count_children(self, comment_id: CommentId) -> int:
        """Count direct replies of a comment.

        Args:
            comment_id: The parent comment ID

        Returns:
            Number of direct replies
        """
        pass

    @abstractmethod
    async def count_children_bulk(
        self, comment_ids: Iterable[CommentId]
    ) -> dict[CommentId, int]:
        """Count direct replies for several comments at once.

        Args:
            comment_ids: Parent comment IDs

        Returns:
            Mapping of every requested ID to its direct reply count
        """
        pass
