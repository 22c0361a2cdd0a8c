"""Authorization guard for comment mutations."""

from typing import Optional

import logfire

from forum.domain.error import ForbiddenError
from forum.domain.model import Identity
from forum.domain.value import Action, Allow, Decision, Deny, UserId

from .base import Service


class AuthorizationGuard(Service):
    """Single decision point for every comment mutation.

    Rules:
    - CREATE and UPVOTE: allowed for any authenticated identity
    - DELETE: allowed for administrators and for the comment's author

    The guard is stateless and never reads the store; callers pass the
    resource owner they already loaded.
    """

    def decide(
        self,
        identity: Identity,
        action: Action,
        resource_owner_id: Optional[UserId] = None,
    ) -> Decision:
        """Evaluate a mutation.

        Args:
            identity: Authenticated caller
            action: Requested mutation
            resource_owner_id: Author of the target comment (DELETE only)

        Returns:
            Allow, or Deny with a reason suitable for the caller
        """
        if action in (Action.CREATE, Action.UPVOTE):
            return Allow()

        # DELETE
        if identity.is_admin:
            return Allow()
        if resource_owner_id is not None and identity.id == resource_owner_id:
            return Allow()
        return Deny(
            reason="Only the comment author or an administrator can delete this comment"
        )

    def can_mutate(
        self,
        identity: Identity,
        action: Action,
        resource_owner_id: Optional[UserId] = None,
    ) -> bool:
        """Boolean form of :meth:`decide`."""
        return isinstance(self.decide(identity, action, resource_owner_id), Allow)

    def authorize(
        self,
        identity: Identity,
        action: Action,
        resource_owner_id: Optional[UserId] = None,
    ) -> None:
        """Raise unless the mutation is allowed.

        Raises:
            ForbiddenError: If the guard denies the mutation
        """
        decision = self.decide(identity, action, resource_owner_id)
        if isinstance(decision, Deny):
            logfire.warn(
                "Mutation denied",
                user_id=identity.id,
                role=identity.role.value,
                action=action.value,
                resource_owner_id=resource_owner_id,
                reason=decision.reason,
            )
            raise ForbiddenError(decision.reason)
