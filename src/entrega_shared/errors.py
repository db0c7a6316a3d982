"""
Typed failures raised by the service layer.

Routes let these propagate; ``register_error_handlers`` turns them into JSON
error envelopes with the matching HTTP status.
"""

from http import HTTPStatus


class DomainError(Exception):
    """Base class for controlled, user-facing failures."""

    status: HTTPStatus = HTTPStatus.BAD_REQUEST
    code: str = "SYSTEM_001"

    def __init__(self, message: str, status: HTTPStatus | None = None, code: str | None = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status
        if code is not None:
            self.code = code


class UnauthenticatedError(DomainError):
    """No resolvable caller identity."""

    status = HTTPStatus.UNAUTHORIZED
    code = "AUTH_002"

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class NotFoundOrUnauthorizedError(DomainError):
    """
    Record missing or owned by somebody else.

    Both cases share one message and status so callers cannot probe for the
    existence of other users' records.
    """

    status = HTTPStatus.NOT_FOUND
    code = "OWN_001"

    def __init__(self, resource: str = "Record"):
        super().__init__(f"{resource} not found or unauthorized")
        self.resource = resource


class ForbiddenError(DomainError):
    status = HTTPStatus.FORBIDDEN
    code = "PERM_001"


class ConflictError(DomainError):
    status = HTTPStatus.CONFLICT
    code = "CONFLICT_001"
