"""Domain layer DI providers."""

from dishka import Scope, provide

from forum.config import AuthSettings, CommentSettings
from forum.domain.repository import CommentRepository, UserRepository
from forum.domain.service import (
    AuthorizationGuard,
    CommentService,
    IdentityService,
    JWTService,
    ThreadAssembler,
)
from forum.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_identity_service(
        self, jwt_service: JWTService, user_repository: UserRepository
    ) -> IdentityService:
        """Provide identity verification service."""
        return IdentityService(jwt_service=jwt_service, user_repository=user_repository)

    @provide(scope=Scope.APP)
    def get_authorization_guard(self) -> AuthorizationGuard:
        """Provide the stateless authorization guard."""
        return AuthorizationGuard()

    @provide
    def get_thread_assembler(
        self,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
    ) -> ThreadAssembler:
        """Provide thread assembler."""
        return ThreadAssembler(
            comment_repository=comment_repository,
            user_repository=user_repository,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
        thread_assembler: ThreadAssembler,
        authorization_guard: AuthorizationGuard,
        settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            user_repository=user_repository,
            thread_assembler=thread_assembler,
            authorization_guard=authorization_guard,
            settings=settings,
        )
