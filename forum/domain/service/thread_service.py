"""Thread assembly: shaping flat comment rows into listings and trees."""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable

import logfire

from forum.domain.model import AuthorSummary, Comment
from forum.domain.repository import CommentRepository, UserRepository
from forum.domain.value import CommentId, SortMode, UserId

from .base import Service
from .ordering import order_comments


@dataclass
class CommentSummary:
    """A comment with its author and the number of direct replies."""

    comment: Comment
    author: AuthorSummary | None
    reply_count: int


@dataclass
class CommentNode:
    """Node in a comment thread.

    Represents a comment and its replies, each reply shaped the same way.
    """

    comment: Comment
    author: AuthorSummary | None
    replies: list["CommentNode"] = field(default_factory=list)

    @property
    def reply_count(self) -> int:
        return len(self.replies)


class ThreadAssembler(Service):
    """Builds root listings and nested threads from the comment store."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
    ) -> None:
        """Initialize thread assembler.

        Args:
            comment_repository: Comment repository
            user_repository: User repository (author lookups)
        """
        self.comment_repository = comment_repository
        self.user_repository = user_repository

    async def assemble_tree(
        self, root_id: CommentId, sort_mode: SortMode = SortMode.TOP
    ) -> CommentNode | None:
        """Assemble the full thread rooted at a comment.

        Algorithm:
        1. Fetch the root and all of its transitive replies in one query
        2. Build adjacency map of parent_id -> [children], each list in sort order
        3. Fetch all authors in one query
        4. Walk the adjacency map from the root with an explicit stack

        Every comment has a single parent, so a comment can only be reached a
        second time through a cyclic parent link back to the root. A child that
        was already expanded is attached as a leaf, so assembly always
        terminates in time linear in the subtree size.

        Args:
            root_id: Comment to use as the root
            sort_mode: Ordering of siblings at every level

        Returns:
            Root node with replies populated to full depth, or None if the
            root comment does not exist
        """
        with logfire.span(
            "thread_assembler.assemble_tree",
            root_id=root_id,
            sort_mode=sort_mode.value,
        ):
            rows = await self.comment_repository.find_subtree(root_id)
            root = next((c for c in rows if c.id == root_id), None)
            if root is None:
                logfire.warn("Thread root not found", root_id=root_id)
                return None

            # Build adjacency map: parent_id -> [children]
            adjacency: dict[CommentId, list[Comment]] = defaultdict(list)
            for comment in rows:
                if comment.parent_id is not None:
                    adjacency[comment.parent_id].append(comment)
            for parent_id, siblings in adjacency.items():
                adjacency[parent_id] = order_comments(siblings, sort_mode)

            authors = await self.authors_for(rows)

            root_node = CommentNode(comment=root, author=authors.get(root.author_id))
            stack: list[CommentNode] = [root_node]
            expanded: set[CommentId] = {root.id}
            node_count = 1
            cycle_count = 0

            while stack:
                node = stack.pop()
                for child in adjacency.get(node.comment.id, []):
                    child_node = CommentNode(
                        comment=child, author=authors.get(child.author_id)
                    )
                    node.replies.append(child_node)
                    node_count += 1
                    if child.id in expanded:
                        cycle_count += 1
                        continue
                    expanded.add(child.id)
                    stack.append(child_node)

            if cycle_count:
                logfire.warn(
                    "Cyclic parent links in thread",
                    root_id=root_id,
                    cycle_count=cycle_count,
                )
            logfire.info("Assembled thread", root_id=root_id, node_count=node_count)
            return root_node

    async def list_roots(
        self, sort_mode: SortMode = SortMode.TOP
    ) -> list[CommentSummary]:
        """List every root comment with its direct reply count.

        Args:
            sort_mode: Ordering of the roots

        Returns:
            Root comments in sort order
        """
        with logfire.span("thread_assembler.list_roots", sort_mode=sort_mode.value):
            roots = await self.comment_repository.find_roots(sort_mode)
            counts = await self.comment_repository.count_children_bulk(
                [c.id for c in roots]
            )
            authors = await self.authors_for(roots)
            logfire.info("Listed root comments", count=len(roots))
            return [
                CommentSummary(
                    comment=c,
                    author=authors.get(c.author_id),
                    reply_count=counts.get(c.id, 0),
                )
                for c in roots
            ]

    async def summarize(self, comment: Comment) -> CommentSummary:
        """Attach author and current direct reply count to a single comment."""
        reply_count = await self.comment_repository.count_children(comment.id)
        authors = await self.authors_for([comment])
        return CommentSummary(
            comment=comment,
            author=authors.get(comment.author_id),
            reply_count=reply_count,
        )

    async def authors_for(
        self, comments: Iterable[Comment]
    ) -> dict[UserId, AuthorSummary]:
        """Look up the author summaries of several comments in one query."""
        author_ids = {c.author_id for c in comments}
        if not author_ids:
            return {}
        users = await self.user_repository.find_by_ids(author_ids)
        return {
            user_id: AuthorSummary.from_user(user) for user_id, user in users.items()
        }
