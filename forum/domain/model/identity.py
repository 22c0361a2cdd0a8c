"""Authenticated principal."""

from forum.domain.model.common import DomainModel
from forum.domain.value import Role, UserId


class Identity(DomainModel):
    """Identity of the caller, produced by the identity provider.

    Holding an Identity means authentication already succeeded.
    """

    id: UserId
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
