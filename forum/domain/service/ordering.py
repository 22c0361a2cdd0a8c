"""Sibling ordering for comment listings and threads.

Order is never stored; it is computed whenever comments are read.
"""

from datetime import datetime
from typing import Iterable

from forum.domain.model import Comment
from forum.domain.value import SortMode


def sort_key(comment: Comment, sort_mode: SortMode) -> tuple[int | datetime, ...]:
    """Return the ascending sort key of a comment for the given mode.

    The trailing id makes the order total, so comments that tie on every
    ranking field still come back in the same order on every call.
    """
    if sort_mode == SortMode.TOP:
        return (comment.upvotes, comment.created_at, comment.id)
    return (comment.created_at, comment.id)


def order_comments(comments: Iterable[Comment], sort_mode: SortMode) -> list[Comment]:
    """Order sibling comments, highest ranked first.

    TOP: upvotes desc, then created_at desc.
    NEW: created_at desc.

    Args:
        comments: Comments to order
        sort_mode: Ordering policy

    Returns:
        New list in display order
    """
    return sorted(comments, key=lambda c: sort_key(c, sort_mode), reverse=True)
