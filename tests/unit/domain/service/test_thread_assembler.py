"""Unit tests for ThreadAssembler."""

import pytest

from forum.domain.repository import CommentRepository, UserRepository
from forum.domain.service import ThreadAssembler
from forum.domain.value import CommentId, SortMode
from tests.conftest import make_comment, make_user
from tests.harness import create_env_fixture

# Unit test fixture - in-memory persistence
unit_env = create_env_fixture()


async def seed(env, *comments, users=None):
    """Store users and comments in the in-memory repositories."""
    user_repo = await env.get(UserRepository)
    comment_repo = await env.get(CommentRepository)
    for user in users or [make_user("user-1", name="Alice")]:
        await user_repo.save(user)
    for comment in comments:
        await comment_repo.save(comment)


def ids(nodes):
    return [node.comment.id for node in nodes]


class TestAssembleTree:
    """Tests for assemble_tree."""

    @pytest.mark.asyncio
    async def test_nested_replies_to_full_depth(self, unit_env):
        """A <- B <- C assembles as A -> B -> C."""
        # Arrange
        await seed(
            unit_env,
            make_comment(1, text="A"),
            make_comment(2, parent_id=1, minutes=1, text="B"),
            make_comment(3, parent_id=2, minutes=2, text="C"),
        )
        assembler = await unit_env.get(ThreadAssembler)

        # Act
        tree = await assembler.assemble_tree(CommentId(1))

        # Assert
        assert tree is not None
        assert tree.comment.text == "A"
        assert ids(tree.replies) == [2]
        assert ids(tree.replies[0].replies) == [3]
        assert tree.replies[0].replies[0].replies == []
        assert tree.reply_count == 1

    @pytest.mark.asyncio
    async def test_missing_root_returns_none(self, unit_env):
        assembler = await unit_env.get(ThreadAssembler)

        assert await assembler.assemble_tree(CommentId(999)) is None

    @pytest.mark.asyncio
    async def test_siblings_follow_sort_mode_at_every_level(self, unit_env):
        """Siblings with upvotes [5, 3, 5] order by TOP and by NEW."""
        await seed(
            unit_env,
            make_comment(1),
            make_comment(2, parent_id=1, upvotes=5, minutes=1),
            make_comment(3, parent_id=1, upvotes=3, minutes=2),
            make_comment(4, parent_id=1, upvotes=5, minutes=3),
            make_comment(5, parent_id=2, upvotes=0, minutes=4),
            make_comment(6, parent_id=2, upvotes=1, minutes=5),
        )
        assembler = await unit_env.get(ThreadAssembler)

        top = await assembler.assemble_tree(CommentId(1), SortMode.TOP)
        new = await assembler.assemble_tree(CommentId(1), SortMode.NEW)

        assert ids(top.replies) == [4, 2, 3]
        assert ids(top.replies[1].replies) == [6, 5]
        assert ids(new.replies) == [4, 3, 2]

    @pytest.mark.asyncio
    async def test_embeds_author_summary(self, unit_env):
        await seed(
            unit_env,
            make_comment(1, author_id="user-1"),
            make_comment(2, author_id="ghost", parent_id=1, minutes=1),
            users=[make_user("user-1", name="Alice")],
        )
        assembler = await unit_env.get(ThreadAssembler)

        tree = await assembler.assemble_tree(CommentId(1))

        assert tree.author is not None
        assert tree.author.name == "Alice"
        # Author missing from the user store
        assert tree.replies[0].author is None

    @pytest.mark.asyncio
    async def test_cyclic_parent_links_terminate(self, unit_env):
        """1 and 2 name each other as parent; the repeat becomes a leaf."""
        await seed(
            unit_env,
            make_comment(1, parent_id=2),
            make_comment(2, parent_id=1, minutes=1),
        )
        assembler = await unit_env.get(ThreadAssembler)

        tree = await assembler.assemble_tree(CommentId(1))

        assert tree.comment.id == 1
        assert ids(tree.replies) == [2]
        assert ids(tree.replies[0].replies) == [1]
        assert tree.replies[0].replies[0].replies == []

    @pytest.mark.asyncio
    async def test_longer_cycle_back_to_root_becomes_leaf(self, unit_env):
        """1 -> 2 -> 3 -> 1: only the repeated root is left unexpanded."""
        await seed(
            unit_env,
            make_comment(1, parent_id=3),
            make_comment(2, parent_id=1, minutes=1),
            make_comment(3, parent_id=2, minutes=2),
        )
        assembler = await unit_env.get(ThreadAssembler)

        tree = await assembler.assemble_tree(CommentId(1))

        third = tree.replies[0].replies[0]
        assert ids(tree.replies) == [2]
        assert third.comment.id == 3
        assert ids(third.replies) == [1]
        assert third.replies[0].replies == []

    @pytest.mark.asyncio
    async def test_self_parented_comment_terminates(self, unit_env):
        await seed(unit_env, make_comment(7, parent_id=7))
        assembler = await unit_env.get(ThreadAssembler)

        tree = await assembler.assemble_tree(CommentId(7))

        assert ids(tree.replies) == [7]
        assert tree.replies[0].replies == []

    @pytest.mark.asyncio
    async def test_orphan_excluded_from_other_trees_but_fetchable(self, unit_env):
        """A comment whose parent does not exist stands alone."""
        await seed(
            unit_env,
            make_comment(1),
            make_comment(2, parent_id=1, minutes=1),
            make_comment(3, parent_id=42, minutes=2),
        )
        assembler = await unit_env.get(ThreadAssembler)

        tree = await assembler.assemble_tree(CommentId(1))
        orphan = await assembler.assemble_tree(CommentId(3))

        assert ids(tree.replies) == [2]
        assert orphan is not None
        assert orphan.comment.parent_id == 42
        assert orphan.replies == []

    @pytest.mark.asyncio
    async def test_deep_chain_does_not_hit_recursion_limit(self, unit_env):
        depth = 20000
        comments = [make_comment(1)] + [
            make_comment(i, parent_id=i - 1, minutes=i) for i in range(2, depth + 1)
        ]
        await seed(unit_env, *comments)
        assembler = await unit_env.get(ThreadAssembler)

        tree = await assembler.assemble_tree(CommentId(1))

        node, levels = tree, 1
        while node.replies:
            node = node.replies[0]
            levels += 1
        assert levels == depth


class TestListRoots:
    """Tests for list_roots."""

    @pytest.mark.asyncio
    async def test_roots_with_reply_counts_in_order(self, unit_env):
        await seed(
            unit_env,
            make_comment(1, upvotes=1, minutes=0),
            make_comment(2, upvotes=4, minutes=1),
            make_comment(3, parent_id=1, minutes=2),
            make_comment(4, parent_id=1, minutes=3),
            make_comment(5, parent_id=3, minutes=4),
        )
        assembler = await unit_env.get(ThreadAssembler)

        top = await assembler.list_roots(SortMode.TOP)
        new = await assembler.list_roots(SortMode.NEW)

        assert [s.comment.id for s in top] == [2, 1]
        assert [s.comment.id for s in new] == [2, 1]
        counts = {s.comment.id: s.reply_count for s in top}
        # Only direct replies count
        assert counts == {1: 2, 2: 0}
        assert top[0].author.name == "Alice"

    @pytest.mark.asyncio
    async def test_no_roots(self, unit_env):
        assembler = await unit_env.get(ThreadAssembler)

        assert await assembler.list_roots() == []
