"""Unit tests for the comment use cases."""

import pytest
import pytest_asyncio

from forum.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentTreeRequest,
    GetCommentTreeUseCase,
    ListCommentsRequest,
    ListCommentsUseCase,
    UpvoteCommentRequest,
    UpvoteCommentUseCase,
)
from forum.application.usecase.comment.common import parse_comment_id
from forum.domain.error import NotFoundError, ValidationError
from forum.domain.repository import CommentRepository, UserRepository
from tests.conftest import identity_of, make_comment, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

ALICE = make_user("alice", name="Alice")


@pytest_asyncio.fixture
async def seeded(unit_env):
    """Alice's thread: root 1 (2 upvotes) with replies 2 and 3, root 4."""
    await (await unit_env.get(UserRepository)).save(ALICE)
    comment_repo = await unit_env.get(CommentRepository)
    for comment in (
        make_comment(1, author_id="alice", upvotes=2, minutes=0),
        make_comment(2, author_id="alice", parent_id=1, upvotes=0, minutes=1),
        make_comment(3, author_id="alice", parent_id=1, upvotes=3, minutes=2),
        make_comment(4, author_id="alice", upvotes=0, minutes=3),
    ):
        await comment_repo.save(comment)


class TestParseCommentId:
    """Tests for parse_comment_id."""

    @pytest.mark.parametrize(
        "value, expected",
        [(7, 7), ("7", 7), (" 12 ", 12), ("2147483647", 2_147_483_647)],
    )
    def test_valid(self, value, expected):
        assert parse_comment_id(value) == expected

    @pytest.mark.parametrize(
        "value",
        [
            "abc",
            "1.5",
            "-3",
            "0",
            0,
            None,
            True,
            "12abc",
            "2147483648",
            "99999999999999999999",
            2**31,
            "9" * 5000,
        ],
    )
    def test_invalid(self, value):
        with pytest.raises(ValidationError, match="Valid comment ID is required"):
            parse_comment_id(value)


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_create_reply_with_string_parent(self, unit_env, seeded):
        use_case = await unit_env.get(CreateCommentUseCase)

        response = await use_case.execute(
            CreateCommentRequest(identity=identity_of(ALICE), text="Hi", parent_id="1")
        )

        assert response.parent_id == 1
        assert response.user.name == "Alice"
        assert response.user_id == "alice"
        assert response.reply_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("parent_id", [None, 0, ""])
    async def test_falsy_parent_creates_root(self, unit_env, seeded, parent_id):
        use_case = await unit_env.get(CreateCommentUseCase)

        response = await use_case.execute(
            CreateCommentRequest(
                identity=identity_of(ALICE), text="Root", parent_id=parent_id
            )
        )

        assert response.parent_id is None

    @pytest.mark.asyncio
    async def test_missing_text(self, unit_env, seeded):
        use_case = await unit_env.get(CreateCommentUseCase)

        with pytest.raises(ValidationError, match="Text is required"):
            await use_case.execute(CreateCommentRequest(identity=identity_of(ALICE)))

    @pytest.mark.asyncio
    async def test_malformed_parent(self, unit_env, seeded):
        use_case = await unit_env.get(CreateCommentUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(
                CreateCommentRequest(
                    identity=identity_of(ALICE), text="Hi", parent_id="abc"
                )
            )


class TestReadUseCases:
    """Tests for ListCommentsUseCase and GetCommentTreeUseCase."""

    @pytest.mark.asyncio
    async def test_list_defaults_to_top(self, unit_env, seeded):
        use_case = await unit_env.get(ListCommentsUseCase)

        response = await use_case.execute(
            ListCommentsRequest(identity=identity_of(ALICE))
        )

        assert [c.id for c in response.comments] == [1, 4]
        assert [c.reply_count for c in response.comments] == [2, 0]
        assert response.current_user.name == "Alice"

    @pytest.mark.asyncio
    async def test_list_new(self, unit_env, seeded):
        use_case = await unit_env.get(ListCommentsUseCase)

        response = await use_case.execute(
            ListCommentsRequest(identity=identity_of(ALICE), sort_by="new")
        )

        assert [c.id for c in response.comments] == [4, 1]

    @pytest.mark.asyncio
    async def test_tree_nests_replies(self, unit_env, seeded):
        use_case = await unit_env.get(GetCommentTreeUseCase)

        top = await use_case.execute(
            GetCommentTreeRequest(identity=identity_of(ALICE), comment_id="1")
        )
        new = await use_case.execute(
            GetCommentTreeRequest(
                identity=identity_of(ALICE), comment_id=1, sort_by="new"
            )
        )

        assert top.reply_count == 2
        assert [r.id for r in top.replies] == [3, 2]
        assert [r.id for r in new.replies] == [3, 2]
        assert all(r.replies == [] for r in top.replies)

    @pytest.mark.asyncio
    async def test_tree_missing(self, unit_env, seeded):
        use_case = await unit_env.get(GetCommentTreeUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                GetCommentTreeRequest(identity=identity_of(ALICE), comment_id=99)
            )


class TestMutationUseCases:
    """Tests for UpvoteCommentUseCase and DeleteCommentUseCase."""

    @pytest.mark.asyncio
    async def test_upvote(self, unit_env, seeded):
        use_case = await unit_env.get(UpvoteCommentUseCase)

        response = await use_case.execute(
            UpvoteCommentRequest(identity=identity_of(ALICE), comment_id="4")
        )

        assert response.id == 4
        assert response.upvotes == 1

    @pytest.mark.asyncio
    async def test_delete(self, unit_env, seeded):
        use_case = await unit_env.get(DeleteCommentUseCase)

        response = await use_case.execute(
            DeleteCommentRequest(identity=identity_of(ALICE), comment_id="1")
        )

        assert response.success is True
        assert response.message == "Comment deleted successfully"
        comment_repo = await unit_env.get(CommentRepository)
        assert [c.id for c in await comment_repo.find_roots()] == [4]
