"""In-memory comment repository for testing."""

from collections import deque
from datetime import datetime
from typing import Iterable, Optional

from forum.domain.model.comment import Comment
from forum.domain.repository.comment import CommentRepository
from forum.domain.service.ordering import order_comments
from forum.domain.value import CommentId, SortMode, UserId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Every method runs without awaiting, so each call is atomic with respect
    to other coroutines on the same event loop.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._last_id = 0

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_children(
        self,
        parent_id: CommentId,
        sort_mode: SortMode = SortMode.TOP,
    ) -> list[Comment]:
        """Find direct replies of a comment."""
        children = [c for c in self._comments.values() if c.parent_id == parent_id]
        return order_comments(children, sort_mode)

    async def find_roots(self, sort_mode: SortMode = SortMode.TOP) -> list[Comment]:
        """Find all comments without a parent."""
        roots = [c for c in self._comments.values() if c.parent_id is None]
        return order_comments(roots, sort_mode)

    async def find_subtree(self, root_id: CommentId) -> list[Comment]:
        """Breadth-first walk from the root, visiting each comment once."""
        if root_id not in self._comments:
            return []

        children: dict[CommentId, list[CommentId]] = {}
        for comment in self._comments.values():
            if comment.parent_id is not None:
                children.setdefault(comment.parent_id, []).append(comment.id)

        seen = {root_id}
        queue = deque([root_id])
        subtree: list[Comment] = []
        while queue:
            current = queue.popleft()
            subtree.append(self._comments[current])
            for child_id in children.get(current, []):
                if child_id not in seen:
                    seen.add(child_id)
                    queue.append(child_id)
        return subtree

    async def insert(
        self,
        text: str,
        author_id: UserId,
        parent_id: Optional[CommentId] = None,
    ) -> Comment:
        """Insert a comment with the next sequential ID."""
        self._last_id += 1
        comment = Comment(
            id=CommentId(self._last_id),
            text=text,
            author_id=author_id,
            parent_id=parent_id,
            upvotes=0,
            created_at=datetime.now(),
        )
        self._comments[comment.id] = comment
        return comment

    async def save(self, comment: Comment) -> Comment:
        """Store a fully specified comment as-is.

        Used to seed fixtures with fixed timestamps, upvote counts or parent
        links that ``insert`` cannot produce.
        """
        self._comments[comment.id] = comment
        self._last_id = max(self._last_id, comment.id)
        return comment

    async def increment_upvotes(self, comment_id: CommentId) -> Optional[Comment]:
        """Atomically increment upvotes by 1."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        updated = comment.model_copy(update={"upvotes": comment.upvotes + 1})
        self._comments[comment_id] = updated
        return updated

    async def delete_cascade(self, comment_id: CommentId) -> bool:
        """Delete a comment and its whole subtree."""
        subtree = await self.find_subtree(comment_id)
        for comment in subtree:
            del self._comments[comment.id]
        return bool(subtree)

    async def count_children(self, comment_id: CommentId) -> int:
        """Count direct replies of a comment."""
        return sum(1 for c in self._comments.values() if c.parent_id == comment_id)

    async def count_children_bulk(
        self, comment_ids: Iterable[CommentId]
    ) -> dict[CommentId, int]:
        """Count direct replies for several comments."""
        counts = {comment_id: 0 for comment_id in comment_ids}
        for comment in self._comments.values():
            if comment.parent_id in counts:
                counts[comment.parent_id] += 1
        return counts
