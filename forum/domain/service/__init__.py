"""Domain services."""

from .authorization import AuthorizationGuard
from .base import Service
from .comment_service import CommentService, RootListing
from .identity_service import IdentityService
from .jwt_service import JWTService
from .thread_service import CommentNode, CommentSummary, ThreadAssembler

__all__ = [
    "AuthorizationGuard",
    "CommentNode",
    "CommentService",
    "CommentSummary",
    "IdentityService",
    "JWTService",
    "RootListing",
    "Service",
    "ThreadAssembler",
]
