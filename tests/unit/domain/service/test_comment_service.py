"""Unit tests for CommentService."""

import asyncio

import pytest
import pytest_asyncio

from forum.domain.error import ForbiddenError, NotFoundError, ValidationError
from forum.domain.repository import CommentRepository, UserRepository
from forum.domain.service import CommentService
from forum.domain.value import CommentId, Role, SortMode
from tests.conftest import identity_of, make_comment, make_user
from tests.harness import create_env_fixture

# Unit test fixture - in-memory persistence
unit_env = create_env_fixture()

ALICE = make_user("alice", name="Alice")
BOB = make_user("bob", name="Bob")
ADMIN = make_user("admin", name="Moderator", role=Role.ADMIN)


@pytest_asyncio.fixture
async def users(unit_env):
    user_repo = await unit_env.get(UserRepository)
    for user in (ALICE, BOB, ADMIN):
        await user_repo.save(user)


class TestCreate:
    """Tests for create."""

    @pytest.mark.asyncio
    async def test_create_root_comment(self, unit_env, users):
        # Arrange
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)

        # Act
        summary = await service.create(identity_of(ALICE), "Hello")

        # Assert
        assert summary.comment.text == "Hello"
        assert summary.comment.author_id == ALICE.id
        assert summary.comment.parent_id is None
        assert summary.comment.upvotes == 0
        assert summary.reply_count == 0
        assert summary.author.name == "Alice"
        assert await comment_repo.find_by_id(summary.comment.id) == summary.comment

    @pytest.mark.asyncio
    async def test_create_reply(self, unit_env, users):
        service = await unit_env.get(CommentService)
        root = await service.create(identity_of(ALICE), "Root")

        reply = await service.create(identity_of(BOB), "Reply", root.comment.id)

        assert reply.comment.parent_id == root.comment.id
        roots = await service.list_roots(identity_of(ALICE))
        assert [s.comment.id for s in roots.comments] == [root.comment.id]
        assert roots.comments[0].reply_count == 1

    @pytest.mark.asyncio
    async def test_ids_increase(self, unit_env, users):
        service = await unit_env.get(CommentService)

        first = await service.create(identity_of(ALICE), "one")
        second = await service.create(identity_of(ALICE), "two")

        assert second.comment.id > first.comment.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None, 5, ["hi"]])
    async def test_missing_or_blank_text_rejected_without_insert(self, unit_env, users, text):
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)

        with pytest.raises(ValidationError, match="Text is required"):
            await service.create(identity_of(ALICE), text)

        assert await comment_repo.find_roots() == []

    @pytest.mark.asyncio
    async def test_oversized_text_rejected(self, unit_env, users):
        service = await unit_env.get(CommentService)
        limit = service.settings.max_text_length

        with pytest.raises(ValidationError, match="at most"):
            await service.create(identity_of(ALICE), "x" * (limit + 1))

    @pytest.mark.asyncio
    async def test_parent_is_not_checked(self, unit_env, users):
        """The service stores a reply to a missing parent as given."""
        service = await unit_env.get(CommentService)

        reply = await service.create(identity_of(ALICE), "Dangling", CommentId(404))

        assert reply.comment.parent_id == 404


class TestUpvote:
    """Tests for upvote."""

    @pytest.mark.asyncio
    async def test_upvote_n_times(self, unit_env, users):
        service = await unit_env.get(CommentService)
        created = await service.create(identity_of(ALICE), "Vote for me")

        for _ in range(5):
            result = await service.upvote(identity_of(BOB), created.comment.id)

        assert result.comment.upvotes == 5
        assert result.author.name == "Alice"

    @pytest.mark.asyncio
    async def test_self_upvote_allowed(self, unit_env, users):
        service = await unit_env.get(CommentService)
        created = await service.create(identity_of(ALICE), "Mine")

        result = await service.upvote(identity_of(ALICE), created.comment.id)

        assert result.comment.upvotes == 1

    @pytest.mark.asyncio
    async def test_concurrent_upvotes_are_not_lost(self, unit_env, users):
        service = await unit_env.get(CommentService)
        created = await service.create(identity_of(ALICE), "Popular")

        await asyncio.gather(
            *(service.upvote(identity_of(BOB), created.comment.id) for _ in range(50))
        )

        tree = await service.get_tree(identity_of(ALICE), created.comment.id)
        assert tree.comment.upvotes == 50

    @pytest.mark.asyncio
    async def test_upvote_missing_comment(self, unit_env, users):
        service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await service.upvote(identity_of(BOB), CommentId(999999))

    @pytest.mark.asyncio
    async def test_upvote_reports_current_reply_count(self, unit_env, users):
        service = await unit_env.get(CommentService)
        root = await service.create(identity_of(ALICE), "Root")
        await service.create(identity_of(BOB), "Reply", root.comment.id)

        result = await service.upvote(identity_of(BOB), root.comment.id)

        assert result.reply_count == 1


class TestDelete:
    """Tests for delete."""

    @pytest_asyncio.fixture
    async def thread(self, unit_env, users):
        """Alice's root 1, Bob's reply 2, Alice's reply 3 under 2, unrelated root 4."""
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment(1, author_id="alice"))
        await comment_repo.save(make_comment(2, author_id="bob", parent_id=1, minutes=1))
        await comment_repo.save(
            make_comment(3, author_id="alice", parent_id=2, minutes=2)
        )
        await comment_repo.save(make_comment(4, author_id="bob", minutes=3))
        return comment_repo

    @pytest.mark.asyncio
    async def test_author_deletes_whole_subtree(self, unit_env, thread):
        service = await unit_env.get(CommentService)

        await service.delete(identity_of(ALICE), CommentId(1))

        for comment_id in (1, 2, 3):
            assert await thread.find_by_id(CommentId(comment_id)) is None
        assert await thread.find_by_id(CommentId(4)) is not None

    @pytest.mark.asyncio
    async def test_admin_deletes_others_comment(self, unit_env, thread):
        service = await unit_env.get(CommentService)

        await service.delete(identity_of(ADMIN), CommentId(2))

        assert await thread.find_by_id(CommentId(2)) is None
        assert await thread.find_by_id(CommentId(3)) is None
        assert await thread.find_by_id(CommentId(1)) is not None

    @pytest.mark.asyncio
    async def test_other_user_forbidden_and_nothing_deleted(self, unit_env, thread):
        service = await unit_env.get(CommentService)

        with pytest.raises(ForbiddenError):
            await service.delete(identity_of(BOB), CommentId(1))

        for comment_id in (1, 2, 3, 4):
            assert await thread.find_by_id(CommentId(comment_id)) is not None

    @pytest.mark.asyncio
    async def test_delete_missing_comment(self, unit_env, users):
        service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await service.delete(identity_of(ADMIN), CommentId(12345))

    @pytest.mark.asyncio
    async def test_subtree_not_fetchable_after_delete(self, unit_env, thread):
        service = await unit_env.get(CommentService)

        await service.delete(identity_of(ALICE), CommentId(1))

        with pytest.raises(NotFoundError):
            await service.get_tree(identity_of(ALICE), CommentId(3))


class TestReads:
    """Tests for list_roots and get_tree."""

    @pytest.mark.asyncio
    async def test_list_roots_includes_current_user(self, unit_env, users):
        service = await unit_env.get(CommentService)
        await service.create(identity_of(ALICE), "Root")

        listing = await service.list_roots(identity_of(BOB), SortMode.NEW)

        assert listing.current_user == BOB
        assert len(listing.comments) == 1

    @pytest.mark.asyncio
    async def test_get_tree_missing_comment(self, unit_env, users):
        service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError) as exc_info:
            await service.get_tree(identity_of(ALICE), CommentId(77))

        assert exc_info.value.code == "not_found"
