"""Comment domain service."""

from dataclasses import dataclass

import logfire

from forum.config import CommentSettings
from forum.domain.error import NotFoundError, ValidationError
from forum.domain.model import Identity, User
from forum.domain.repository import CommentRepository, UserRepository
from forum.domain.value import Action, CommentId, SortMode

from .authorization import AuthorizationGuard
from .base import Service
from .thread_service import CommentNode, CommentSummary, ThreadAssembler


@dataclass
class RootListing:
    """Root comments together with the requesting user's profile."""

    comments: list[CommentSummary]
    current_user: User | None


class CommentService(Service):
    """Domain service for comment operations.

    Every mutation goes through the authorization guard, and input is
    validated before the store is touched.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
        thread_assembler: ThreadAssembler,
        authorization_guard: AuthorizationGuard,
        settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            user_repository: User repository
            thread_assembler: Shapes listings and threads
            authorization_guard: Mutation authorization
            settings: Comment settings
        """
        self.comment_repository = comment_repository
        self.user_repository = user_repository
        self.thread_assembler = thread_assembler
        self.authorization_guard = authorization_guard
        self.settings = settings

    async def create(
        self,
        identity: Identity,
        text: str,
        parent_id: CommentId | None = None,
    ) -> CommentSummary:
        """Create a root comment or a reply.

        The parent is used as given; its existence is not checked here.

        Args:
            identity: Authenticated author
            text: Comment text
            parent_id: Parent comment ID for replies (None for root comments)

        Returns:
            Created comment with author and a reply count of 0

        Raises:
            ValidationError: If text is missing, not a string, empty after
                trimming or too long
        """
        with logfire.span(
            "comment_service.create",
            author_id=identity.id,
            parent_id=parent_id,
        ):
            self.authorization_guard.authorize(identity, Action.CREATE)

            if not isinstance(text, str) or not text.strip():
                logfire.warn("Rejected empty comment", author_id=identity.id)
                raise ValidationError("Text is required")
            if len(text) > self.settings.max_text_length:
                logfire.warn(
                    "Rejected oversized comment",
                    author_id=identity.id,
                    text_length=len(text),
                )
                raise ValidationError(
                    f"Text must be at most {self.settings.max_text_length} characters"
                )

            comment = await self.comment_repository.insert(
                text=text,
                author_id=identity.id,
                parent_id=parent_id,
            )
            logfire.info(
                "Comment created",
                comment_id=comment.id,
                author_id=identity.id,
                parent_id=parent_id,
            )
            authors = await self.thread_assembler.authors_for([comment])
            return CommentSummary(
                comment=comment,
                author=authors.get(comment.author_id),
                reply_count=0,
            )

    async def upvote(self, identity: Identity, comment_id: CommentId) -> CommentSummary:
        """Add one upvote to a comment.

        Repeated calls by the same identity each count.

        Args:
            identity: Authenticated voter
            comment_id: Comment ID

        Returns:
            Updated comment with author and current reply count

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_service.upvote", comment_id=comment_id, user_id=identity.id
        ):
            self.authorization_guard.authorize(identity, Action.UPVOTE)

            updated = await self.comment_repository.increment_upvotes(comment_id)
            if updated is None:
                logfire.warn("Upvote on non-existent comment", comment_id=comment_id)
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment upvoted", comment_id=comment_id, upvotes=updated.upvotes
            )
            return await self.thread_assembler.summarize(updated)

    async def delete(self, identity: Identity, comment_id: CommentId) -> None:
        """Delete a comment and all of its replies.

        Args:
            identity: Authenticated caller
            comment_id: Comment ID

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the caller is neither the author nor an admin
        """
        with logfire.span(
            "comment_service.delete", comment_id=comment_id, user_id=identity.id
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                logfire.warn("Delete of non-existent comment", comment_id=comment_id)
                raise NotFoundError("Comment", str(comment_id))

            self.authorization_guard.authorize(
                identity, Action.DELETE, comment.author_id
            )

            deleted = await self.comment_repository.delete_cascade(comment_id)
            if not deleted:
                # Removed by a concurrent request after the lookup
                logfire.warn("Comment vanished before delete", comment_id=comment_id)
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment deleted",
                comment_id=comment_id,
                author_id=comment.author_id,
                deleted_by=identity.id,
            )

    async def list_roots(
        self, identity: Identity, sort_mode: SortMode = SortMode.TOP
    ) -> RootListing:
        """List root comments with reply counts.

        Args:
            identity: Authenticated caller
            sort_mode: Ordering of the roots

        Returns:
            Root comments and the caller's public profile
        """
        with logfire.span(
            "comment_service.list_roots",
            user_id=identity.id,
            sort_mode=sort_mode.value,
        ):
            comments = await self.thread_assembler.list_roots(sort_mode)
            current_user = await self.user_repository.find_by_id(identity.id)
            return RootListing(comments=comments, current_user=current_user)

    async def get_tree(
        self,
        identity: Identity,
        comment_id: CommentId,
        sort_mode: SortMode = SortMode.TOP,
    ) -> CommentNode:
        """Get a comment with all of its nested replies.

        Any authenticated identity may read any thread.

        Args:
            identity: Authenticated caller
            comment_id: Root of the thread
            sort_mode: Ordering of siblings at every level

        Returns:
            Root node with replies populated to full depth

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_service.get_tree", comment_id=comment_id, user_id=identity.id
        ):
            tree = await self.thread_assembler.assemble_tree(comment_id, sort_mode)
            if tree is None:
                raise NotFoundError("Comment", str(comment_id))
            return tree
