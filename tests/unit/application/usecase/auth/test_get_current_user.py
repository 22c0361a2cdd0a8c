"""Unit tests for GetCurrentUserUseCase."""

import pytest

from forum.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
)
from forum.config import AuthSettings
from forum.domain.error import AuthError
from forum.domain.repository import UserRepository
from tests.conftest import bearer_for, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetCurrentUserUseCase:
    """Tests for GetCurrentUserUseCase."""

    @pytest.mark.asyncio
    async def test_returns_public_profile(self, unit_env):
        # Arrange
        await (await unit_env.get(UserRepository)).save(
            make_user("alice", name="Alice", email="alice@example.com")
        )
        auth_settings = await unit_env.get(AuthSettings)
        use_case = await unit_env.get(GetCurrentUserUseCase)

        # Act
        response = await use_case.execute(
            GetCurrentUserRequest(
                authorization=bearer_for("alice", auth_settings)["Authorization"]
            )
        )

        # Assert
        assert response.id == "alice"
        assert response.name == "Alice"
        assert response.email == "alice@example.com"
        assert "password_hash" not in response.model_dump()

    @pytest.mark.asyncio
    async def test_requires_token(self, unit_env):
        use_case = await unit_env.get(GetCurrentUserUseCase)

        with pytest.raises(AuthError):
            await use_case.execute(GetCurrentUserRequest())
