"""Get current user use case."""

from datetime import datetime

from pydantic import BaseModel

from forum.domain.service import IdentityService
from forum.domain.value import Role


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    authorization: str | None = None  # Raw Authorization header value


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    id: str
    name: str
    email: str | None
    avatar: str | None
    role: Role
    created_at: datetime


class GetCurrentUserUseCase:
    """Use case for getting current authenticated user."""

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize get current user use case.

        Args:
            identity_service: Identity provider boundary
        """
        self.identity_service = identity_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Steps:
        1. Verify the bearer token
        2. Load the user it names
        3. Return the public profile

        Raises:
            AuthError: If the token is missing, invalid or expired, or the user
                no longer exists
        """
        identity = await self.identity_service.verify_bearer(request.authorization)
        user = await self.identity_service.get_user(identity)

        return GetCurrentUserResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            avatar=user.avatar,
            role=user.role,
            created_at=user.created_at,
        )
