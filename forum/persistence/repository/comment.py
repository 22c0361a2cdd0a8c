"""PostgreSQL implementation of Comment repository."""

from typing import Iterable, List, Optional

from sqlalchemy import delete, desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, SortMode, UserId
from forum.persistence.database import store_errors
from forum.persistence.mappers import row_to_comment
from forum.persistence.tables import comments_table


def _order_by(sort_mode: SortMode) -> list:
    """ORDER BY clauses for a sort mode, newest id breaking ties."""
    if sort_mode == SortMode.TOP:
        return [
            desc(comments_table.c.upvotes),
            desc(comments_table.c.created_at),
            desc(comments_table.c.id),
        ]
    return [desc(comments_table.c.created_at), desc(comments_table.c.id)]


def _subtree_ids(root_id: CommentId):
    """Recursive CTE selecting the root and every transitive reply.

    UNION (not UNION ALL) discards rows already produced, so a cyclic
    parent chain stops the recursion instead of looping.
    """
    subtree = (
        select(comments_table.c.id)
        .where(comments_table.c.id == root_id)
        .cte(name="subtree", recursive=True)
    )
    replies = select(comments_table.c.id).join(
        subtree, comments_table.c.parent_id == subtree.c.id
    )
    return subtree.union(replies)


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        with store_errors("find_by_id"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_comment(row) if row else None

    async def find_children(
        self,
        parent_id: CommentId,
        sort_mode: SortMode = SortMode.TOP,
    ) -> List[Comment]:
        """Find direct replies of a comment."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id == parent_id)
            .order_by(*_order_by(sort_mode))
        )
        with store_errors("find_children"):
            result = await self.session.execute(stmt)
        return [row_to_comment(row) for row in result.mappings().all()]

    async def find_roots(self, sort_mode: SortMode = SortMode.TOP) -> List[Comment]:
        """Find all comments without a parent."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id.is_(None))
            .order_by(*_order_by(sort_mode))
        )
        with store_errors("find_roots"):
            result = await self.session.execute(stmt)
        return [row_to_comment(row) for row in result.mappings().all()]

    async def find_subtree(self, root_id: CommentId) -> List[Comment]:
        """Find a comment and all of its transitive replies in one round trip."""
        subtree = _subtree_ids(root_id)
        stmt = select(comments_table).where(
            comments_table.c.id.in_(select(subtree.c.id))
        )
        with store_errors("find_subtree"):
            result = await self.session.execute(stmt)
        return [row_to_comment(row) for row in result.mappings().all()]

    async def insert(
        self,
        text: str,
        author_id: UserId,
        parent_id: Optional[CommentId] = None,
    ) -> Comment:
        """Insert a comment; the database assigns id, created_at and upvotes."""
        stmt = (
            comments_table.insert()
            .values(text=text, user_id=author_id, parent_id=parent_id)
            .returning(comments_table)
        )
        with store_errors("insert"):
            result = await self.session.execute(stmt)
            row = result.mappings().one()
            await self.session.flush()
        return row_to_comment(row)

    async def increment_upvotes(self, comment_id: CommentId) -> Optional[Comment]:
        """Atomically increment upvotes by 1.

        The increment happens inside the UPDATE itself, so concurrent
        upvotes never overwrite each other.
        """
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(upvotes=comments_table.c.upvotes + 1)
            .returning(comments_table)
        )
        with store_errors("increment_upvotes"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            await self.session.flush()
        return row_to_comment(row) if row else None

    async def delete_cascade(self, comment_id: CommentId) -> bool:
        """Delete a comment and its whole subtree in a single statement."""
        subtree = _subtree_ids(comment_id)
        stmt = (
            delete(comments_table)
            .where(comments_table.c.id.in_(select(subtree.c.id)))
            .returning(comments_table.c.id)
        )
        with store_errors("delete_cascade"):
            result = await self.session.execute(stmt)
            deleted = result.scalars().all()
            await self.session.flush()
        return comment_id in deleted

    async def count_children(self, comment_id: CommentId) -> int:
        """Count direct replies of a comment."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.parent_id == comment_id)
        )
        with store_errors("count_children"):
            result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_children_bulk(
        self, comment_ids: Iterable[CommentId]
    ) -> dict[CommentId, int]:
        """Count direct replies for many comments with one GROUP BY query."""
        ids = list(comment_ids)
        counts: dict[CommentId, int] = {comment_id: 0 for comment_id in ids}
        if not ids:
            return counts

        stmt = (
            select(comments_table.c.parent_id, func.count())
            .where(comments_table.c.parent_id.in_(ids))
            .group_by(comments_table.c.parent_id)
        )
        with store_errors("count_children_bulk"):
            result = await self.session.execute(stmt)
        for parent_id, count in result.all():
            counts[CommentId(parent_id)] = count
        return counts
