"""Domain layer errors.

Every error carries a stable ``code`` so callers can tell the categories apart
without parsing messages.
"""


class DomainError(Exception):
    """Base domain error."""

    code = "domain_error"


class ValidationError(DomainError):
    """Malformed or missing required input."""

    code = "validation_error"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    code = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when an authenticated identity may not perform a mutation."""

    code = "forbidden"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class AuthError(DomainError):
    """Missing, invalid or expired credential."""

    code = "unauthorized"


class StoreError(DomainError):
    """Persistence failure.

    The message is always opaque; the underlying exception is chained as
    ``__cause__`` for logging only.
    """

    code = "internal_error"

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__("Internal server error")
