"""
Explicit success/failure outcomes for core operations.

Services return ``Ok(value)`` or ``Err(failure)`` instead of raising, and the
routers unwrap the result at the request boundary. Every ``Failure`` belongs
to exactly one category of the HTTP error taxonomy in ``vidtube.core.exceptions``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar, Union

from vidtube.core.exceptions import (
    INVALID_CREDENTIAL,
    ConflictError,
    DependencyUnavailableError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    VidTubeException,
)

T = TypeVar("T")


class Failure(str, Enum):
    # Credentials
    TOKEN_MISSING = "TOKEN_MISSING"
    TOKEN_INVALID = "TOKEN_INVALID"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_STALE = "TOKEN_STALE"
    IDENTITY_MISSING = "IDENTITY_MISSING"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Input
    VALIDATION = "VALIDATION_ERROR"
    INVALID_REFERENCE = "INVALID_REFERENCE"

    # Authorization
    FORBIDDEN = "FORBIDDEN"

    # Resources
    NOT_FOUND = "NOT_FOUND"
    TARGET_NOT_FOUND = "TARGET_NOT_FOUND"
    CONFLICT = "CONFLICT"
    SELF_REFERENCE_FORBIDDEN = "SELF_REFERENCE_FORBIDDEN"

    # Infrastructure
    DEPENDENCY_UNAVAILABLE = "DEPENDENCY_UNAVAILABLE"

    @property
    def is_credential_failure(self) -> bool:
        return self in _CREDENTIAL_FAILURES


_CREDENTIAL_FAILURES = frozenset({
    Failure.TOKEN_MISSING,
    Failure.TOKEN_INVALID,
    Failure.TOKEN_EXPIRED,
    Failure.TOKEN_STALE,
    Failure.IDENTITY_MISSING,
})


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    failure: Failure
    # Client-facing message. Ignored for credential failures.
    detail: Optional[str] = None

    def to_exception(self) -> VidTubeException:
        """Map this failure onto the HTTP exception that shapes the response."""
        failure = self.failure
        code = failure.value

        if failure.is_credential_failure:
            return UnauthorizedError(INVALID_CREDENTIAL)
        if failure is Failure.INVALID_CREDENTIALS:
            return UnauthorizedError(self.detail or "Invalid credentials", error_code=code)
        if failure in (Failure.VALIDATION, Failure.INVALID_REFERENCE):
            return ValidationError(self.detail or "Invalid input", error_code=code)
        if failure is Failure.FORBIDDEN:
            return ForbiddenError(self.detail or ForbiddenError().detail)
        if failure in (Failure.NOT_FOUND, Failure.TARGET_NOT_FOUND):
            return NotFoundError(detail=self.detail, error_code=code)
        if failure is Failure.SELF_REFERENCE_FORBIDDEN:
            return ConflictError(
                self.detail or "You cannot subscribe to yourself",
                error_code=code,
                status_code=400,
            )
        if failure is Failure.CONFLICT:
            return ConflictError(self.detail or "Resource already exists")
        if failure is Failure.DEPENDENCY_UNAVAILABLE:
            return DependencyUnavailableError(detail=self.detail)
        raise ValueError(f"Unmapped failure: {failure!r}")


Result = Union[Ok[T], Err]


def unwrap(result: "Result[T]") -> T:
    """Return the success value or raise the mapped HTTP exception."""
    if isinstance(result, Err):
        raise result.to_exception()
    return result.value
