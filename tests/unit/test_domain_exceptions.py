"""Tests for domain exceptions (error_code, message, details)."""

from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CompensationFailedException,
    ConflictException,
    HashingException,
    MailDeliveryException,
    PersistenceException,
    ResourceNotFoundException,
    SigningException,
    SocialException,
    UserAlreadyExistsException,
    ValidationException,
    VersionConflictException,
)


def test_social_exception_default_error_code() -> None:
    """Base SocialException uses class name as error_code when not provided."""
    exc = SocialException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "SocialException"
    assert exc.details == {}


def test_social_exception_to_dict() -> None:
    """to_dict is the JSON error body."""
    exc = SocialException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid format", field="email")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "email"}
    assert ValidationException("Invalid").details == {}


def test_authentication_exception_keeps_reason_in_details() -> None:
    exc = AuthenticationException("Invalid token", reason="expired")
    assert exc.error_code == "AUTHENTICATION_ERROR"
    assert exc.details == {"reason": "expired"}
    assert AuthenticationException().message == "Authentication failed"


def test_authorization_exception_builds_message_from_resource_and_action() -> None:
    exc = AuthorizationException("post", "update")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.message == "Permission denied: update on post"
    assert exc.details == {"resource": "post", "action": "update"}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("user", "u1")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "user", "resource_id": "u1"}
    assert "u1" in exc.message


def test_user_already_exists_is_a_conflict() -> None:
    exc = UserAlreadyExistsException()
    assert isinstance(exc, ConflictException)
    assert exc.error_code == "USER_ALREADY_EXISTS"


def test_version_conflict_is_distinct_from_not_found() -> None:
    exc = VersionConflictException("post", "p1", 3)
    assert not isinstance(exc, ResourceNotFoundException)
    assert exc.error_code == "VERSION_CONFLICT"
    assert exc.details["expected_version"] == 3


def test_infrastructure_failures_have_their_own_codes() -> None:
    assert PersistenceException("activate", "timeout").details == {
        "operation": "activate",
        "reason": "timeout",
    }
    assert HashingException().error_code == "HASHING_ERROR"
    assert SigningException().error_code == "SIGNING_ERROR"
    assert MailDeliveryException(reason="http_500").details == {"reason": "http_500"}


def test_compensation_failed_exception_records_both_errors() -> None:
    exc = CompensationFailedException("create_and_invite", "mail down", "db down")
    assert exc.error_code == "COMPENSATION_FAILED"
    assert exc.details == {
        "step": "create_and_invite",
        "original_error": "mail down",
        "compensation_error": "db down",
    }
