"""Custom exceptions and error handling for VidTube API."""

from fastapi import HTTPException, status


# Single client-facing message for every token failure (expired, malformed,
# bad signature, stale, unknown subject).
INVALID_CREDENTIAL = "Invalid credential"


class VidTubeException(HTTPException):
    """Base exception for VidTube API."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: str | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


# Validation Errors (400)
class ValidationError(VidTubeException):
    """Raised when input validation fails."""

    def __init__(self, detail: str = "Invalid input", error_code: str = "VALIDATION_ERROR"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code,
        )


# Authentication Errors (401, 403)
class UnauthorizedError(VidTubeException):
    """Raised when a credential is missing, invalid or expired."""

    def __init__(self, detail: str = INVALID_CREDENTIAL, error_code: str = "UNAUTHORIZED"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code=error_code,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(VidTubeException):
    """Raised when an authenticated user is not entitled to an action."""

    def __init__(
        self,
        detail: str = "You do not have permission to perform this action",
        error_code: str = "FORBIDDEN",
    ):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code=error_code,
        )


# Resource Errors (404, 409)
class NotFoundError(VidTubeException):
    """Raised when a resource is not found."""

    def __init__(
        self,
        resource: str = "Resource",
        detail: str | None = None,
        error_code: str = "NOT_FOUND",
    ):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail or f"{resource} not found",
            error_code=error_code,
        )


class ConflictError(VidTubeException):
    """Raised when a request conflicts with existing state."""

    def __init__(
        self,
        detail: str = "Resource already exists",
        error_code: str = "CONFLICT",
        status_code: int = status.HTTP_409_CONFLICT,
    ):
        super().__init__(
            status_code=status_code,
            detail=detail,
            error_code=error_code,
        )


# Rate Limiting (429)
class RateLimitExceededError(VidTubeException):
    """Raised when rate limit is exceeded."""

    def __init__(self, detail: str = "Rate limit exceeded. Please try again later."):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=detail,
            error_code="RATE_LIMIT_EXCEEDED",
        )


# Server Errors (503)
class DependencyUnavailableError(VidTubeException):
    """Raised when the store or another dependency timed out or is unreachable."""

    def __init__(self, service: str = "Database", detail: str | None = None, retry_after: int = 5):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail or f"{service} is temporarily unavailable",
            error_code="DEPENDENCY_UNAVAILABLE",
            headers={"Retry-After": str(retry_after)},
        )
