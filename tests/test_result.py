"""Tests for result unwrapping and the ownership guard."""

import uuid

import pytest

from vidtube.core.exceptions import (
    ConflictError,
    DependencyUnavailableError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from vidtube.core.ownership import authorize_mutation, parse_reference
from vidtube.core.result import Err, Failure, Ok, unwrap


class TestUnwrap:
    """Test mapping failures onto HTTP errors."""

    def test_ok_returns_value(self):
        assert unwrap(Ok(42)) == 42

    @pytest.mark.parametrize("failure", [
        Failure.TOKEN_MISSING,
        Failure.TOKEN_INVALID,
        Failure.TOKEN_EXPIRED,
        Failure.TOKEN_STALE,
        Failure.IDENTITY_MISSING,
    ])
    def test_credential_failures_share_one_message(self, failure):
        with pytest.raises(UnauthorizedError) as exc_info:
            unwrap(Err(failure, "leaky detail"))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid credential"

    def test_invalid_credentials_keeps_detail(self):
        with pytest.raises(UnauthorizedError) as exc_info:
            unwrap(Err(Failure.INVALID_CREDENTIALS, "Invalid credentials"))

        assert exc_info.value.detail == "Invalid credentials"

    @pytest.mark.parametrize("failure, exc_type, status_code", [
        (Failure.VALIDATION, ValidationError, 400),
        (Failure.INVALID_REFERENCE, ValidationError, 400),
        (Failure.FORBIDDEN, ForbiddenError, 403),
        (Failure.NOT_FOUND, NotFoundError, 404),
        (Failure.TARGET_NOT_FOUND, NotFoundError, 404),
        (Failure.CONFLICT, ConflictError, 409),
        (Failure.SELF_REFERENCE_FORBIDDEN, ConflictError, 400),
        (Failure.DEPENDENCY_UNAVAILABLE, DependencyUnavailableError, 503),
    ])
    def test_failure_categories(self, failure, exc_type, status_code):
        with pytest.raises(exc_type) as exc_info:
            unwrap(Err(failure, "detail"))

        assert exc_info.value.status_code == status_code

    def test_dependency_unavailable_is_retryable(self):
        with pytest.raises(DependencyUnavailableError) as exc_info:
            unwrap(Err(Failure.DEPENDENCY_UNAVAILABLE))

        assert "Retry-After" in exc_info.value.headers

    @pytest.mark.parametrize("failure", [f for f in Failure if f is not Failure.DEPENDENCY_UNAVAILABLE])
    def test_only_dependency_failures_are_retryable(self, failure):
        exc = Err(failure).to_exception()

        assert exc.status_code != 503
        assert not (exc.headers or {}).get("Retry-After")

    def test_every_failure_is_mapped(self):
        for failure in Failure:
            assert Err(failure).to_exception().error_code


class TestOwnershipGuard:
    """Test authorize_mutation."""

    def test_owner_allowed(self):
        owner = uuid.uuid4()
        assert authorize_mutation(owner, owner) == Ok(None)

    def test_compares_by_value(self):
        owner = uuid.uuid4()
        assert authorize_mutation(owner, str(owner)) == Ok(None)

    def test_other_user_forbidden(self):
        assert authorize_mutation(uuid.uuid4(), uuid.uuid4()) == Err(Failure.FORBIDDEN)

    def test_malformed_reference_forbidden(self):
        assert authorize_mutation(uuid.uuid4(), "not-a-uuid") == Err(Failure.FORBIDDEN)

    def test_parse_reference(self):
        value = uuid.uuid4()
        assert parse_reference(str(value)) == value
        assert parse_reference("abc") is None
        assert parse_reference(None) is None
