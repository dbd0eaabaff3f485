"""Unit tests for RegistrationService (saga over mocked workflow and mailer)."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.application.dtos.user import UserResult
from app.application.services.registration_service import RegistrationService
from app.domain.exceptions import (
    CompensationFailedException,
    MailDeliveryException,
    ResourceNotFoundException,
    UserAlreadyExistsException,
)
from app.infrastructure.services.mail_template_renderer import MailTemplateRenderer


def _created(user, *_args) -> UserResult:
    return UserResult(id=user.id, username=user.username, email=user.email, is_active=False)


@pytest.fixture
def workflow() -> AsyncMock:
    wf = AsyncMock()
    wf.create_and_invite.side_effect = _created
    return wf


@pytest.fixture
def hasher() -> MagicMock:
    h = MagicMock()
    h.hash.return_value = "hashed"
    return h


def _service(workflow, mailer, hasher, cache=None) -> RegistrationService:
    return RegistrationService(
        workflow,
        mailer,
        MailTemplateRenderer(app_name="socialhub"),
        hasher,
        frontend_url="https://app.example.com/",
        invitation_ttl=timedelta(hours=24),
        cache=cache,
    )


async def test_register_creates_user_and_mails_activation_link(workflow, hasher) -> None:
    mailer = AsyncMock()
    result = await _service(workflow, mailer, hasher).register("alice", "a@x.com", "password1")

    user, token, ttl = workflow.create_and_invite.await_args.args
    assert user.hashed_password == "hashed"
    assert user.id == result.user_id
    assert token == result.token
    assert ttl == timedelta(hours=24)

    to_email, subject, body = mailer.send.await_args.args
    assert to_email == "a@x.com"
    assert "socialhub" in subject
    assert f"https://app.example.com/confirm/{result.token}" in body
    workflow.delete_user.assert_not_awaited()


async def test_mail_failure_deletes_user_and_reraises(workflow, hasher) -> None:
    mailer = AsyncMock()
    mailer.send.side_effect = MailDeliveryException(reason="http_500")

    with pytest.raises(MailDeliveryException):
        await _service(workflow, mailer, hasher).register("alice", "a@x.com", "password1")

    created_user = workflow.create_and_invite.await_args.args[0]
    workflow.delete_user.assert_awaited_once_with(created_user.id)


async def test_unexpected_mailer_error_is_reported_as_mail_failure(workflow, hasher) -> None:
    mailer = AsyncMock()
    mailer.send.side_effect = ConnectionResetError("reset")

    with pytest.raises(MailDeliveryException) as exc_info:
        await _service(workflow, mailer, hasher).register("alice", "a@x.com", "password1")
    assert exc_info.value.details == {"reason": "ConnectionResetError"}
    workflow.delete_user.assert_awaited_once()


async def test_failed_delete_raises_compensation_failed(workflow, hasher) -> None:
    mailer = AsyncMock()
    mailer.send.side_effect = MailDeliveryException()
    workflow.delete_user.side_effect = RuntimeError("store down")

    with pytest.raises(CompensationFailedException) as exc_info:
        await _service(workflow, mailer, hasher).register("alice", "a@x.com", "password1")
    assert exc_info.value.details["step"] == "create_and_invite"


async def test_duplicate_user_sends_no_mail(workflow, hasher) -> None:
    workflow.create_and_invite.side_effect = UserAlreadyExistsException()
    mailer = AsyncMock()

    with pytest.raises(UserAlreadyExistsException):
        await _service(workflow, mailer, hasher).register("alice", "a@x.com", "password1")
    mailer.send.assert_not_awaited()
    workflow.delete_user.assert_not_awaited()


async def test_activate_invalidates_cached_user(workflow, hasher) -> None:
    workflow.activate.return_value = "user-id-1"
    cache = AsyncMock()
    assert await _service(workflow, AsyncMock(), hasher, cache).activate("tok") == "user-id-1"
    cache.delete.assert_awaited_once_with("user-id-1")


async def test_activate_bad_token_propagates_not_found(workflow, hasher) -> None:
    workflow.activate.side_effect = ResourceNotFoundException("invitation", "token")
    cache = AsyncMock()
    with pytest.raises(ResourceNotFoundException):
        await _service(workflow, AsyncMock(), hasher, cache).activate("bad")
    cache.delete.assert_not_awaited()
