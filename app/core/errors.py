"""Domain errors raised by services and mapped to HTTP responses.

Every error carries a machine-readable ``ErrorCode``, a user-safe message and
the HTTP status the API layer answers with. Services never raise
``HTTPException`` directly.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"


class DomainError(Exception):
    """Base domain error with code, user-safe message and HTTP status."""

    status_code: int = 500

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Missing or malformed input."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.VALIDATION_ERROR, message)


class Unauthorized(DomainError):
    """Missing, invalid or expired credentials."""

    status_code = 401

    def __init__(self, message: str = "Not authorized") -> None:
        super().__init__(ErrorCode.UNAUTHORIZED, message)


class InvalidCredentials(Unauthorized):
    """Login failed. Deliberately says nothing about which check failed."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password.")
        self.code = ErrorCode.INVALID_CREDENTIALS


class Forbidden(DomainError):
    """Authenticated, but not allowed to touch this resource.

    Answered with 401 to keep the existing client contract.
    """

    status_code = 401

    def __init__(self, message: str = "User not authorized") -> None:
        super().__init__(ErrorCode.FORBIDDEN, message)


class NotFound(DomainError):
    """Entity absent, or present but not visible to the caller."""

    status_code = 404

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(ErrorCode.NOT_FOUND, message)


class Conflict(DomainError):
    """Duplicate email, either at signup or on event registration."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.DUPLICATE_EMAIL, message)


class UpstreamUnavailable(DomainError):
    """The generative-AI backend failed or answered with an unusable shape."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.UPSTREAM_UNAVAILABLE, message)
