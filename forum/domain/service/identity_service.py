"""Identity provider boundary: bearer credential -> Identity."""

import logfire

from forum.domain.error import AuthError
from forum.domain.model import Identity, User
from forum.domain.repository import UserRepository
from forum.domain.value import UserId
from forum.util.jwt import JWTError, TokenExpiredError

from .base import Service
from .jwt_service import JWTService

BEARER_PREFIX = "Bearer "


class IdentityService(Service):
    """Verifies credentials and resolves the caller's identity.

    The role is read from the user store on every call, so a role change
    takes effect without reissuing tokens.
    """

    def __init__(self, jwt_service: JWTService, user_repository: UserRepository) -> None:
        """Initialize identity service.

        Args:
            jwt_service: JWT token domain service
            user_repository: User repository
        """
        self.jwt_service = jwt_service
        self.user_repository = user_repository

    async def verify(self, credential: str | None) -> Identity:
        """Verify a token and return the identity it belongs to.

        Args:
            credential: Raw JWT token

        Returns:
            Authenticated identity

        Raises:
            AuthError: If the token is missing, invalid, expired, or names an
                unknown user
        """
        if not credential:
            raise AuthError("No token provided. Please login.")

        try:
            payload = self.jwt_service.verify_token(credential)
        except TokenExpiredError:
            raise AuthError("Token expired. Please login again.")
        except JWTError:
            raise AuthError("Invalid token")

        user = await self.user_repository.find_by_id(UserId(payload.user_id))
        if user is None:
            logfire.warn("Token for unknown user", user_id=payload.user_id)
            raise AuthError("User not found")

        return Identity(id=user.id, role=user.role)

    async def get_user(self, identity: Identity) -> User:
        """Load the full profile behind an identity.

        Raises:
            AuthError: If the user was removed after the token was verified
        """
        user = await self.user_repository.find_by_id(identity.id)
        if user is None:
            raise AuthError("User not found")
        return user

    async def verify_bearer(self, authorization: str | None) -> Identity:
        """Verify an ``Authorization: Bearer <token>`` header value.

        Raises:
            AuthError: If the header is missing or malformed, or the token
                does not verify
        """
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise AuthError("No token provided. Please login.")
        return await self.verify(authorization[len(BEARER_PREFIX) :].strip())
