"""Domain layer errors.

Every failure a caller can see is one of these kinds. Reason strings for
invalid-state failures come from roster.domain.service.reasons.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error (malformed input such as an unknown role)."""

    pass


class UnauthenticatedError(DomainError):
    """Raised when a bearer credential is missing or invalid."""

    def __init__(self, message: str = "Invalid authorization token"):
        super().__init__(message)


class ForbiddenError(DomainError):
    """Raised when an authenticated caller lacks the required role or ownership."""

    def __init__(self, message: str):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str, message: str | None = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(message or f"{resource} not found: {identifier}")


class InvalidStateError(DomainError):
    """Raised when an operation is not allowed in the entity's current state.

    Covers claimed or expired invites, inactive links and PROs, exhausted
    seats and duplicate membership.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class ConflictError(DomainError):
    """Raised when a transaction lost a race with a concurrent writer."""

    def __init__(self, message: str = "Concurrent update conflict"):
        super().__init__(message)


class UpstreamFailureError(DomainError):
    """Raised when the identity provider or the store failed or timed out."""

    pass
