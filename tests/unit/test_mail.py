"""Unit tests for mail rendering and the SendGrid sender (httpx MockTransport)."""

import httpx
import pytest

from app.core.config import get_settings
from app.domain.exceptions import MailDeliveryException
from app.infrastructure.services.mail_service import LogOnlyMailer, SendGridMailer, build_mailer
from app.infrastructure.services.mail_template_renderer import MailTemplateRenderer


def test_welcome_mail_contains_activation_link() -> None:
    subject, body = MailTemplateRenderer(app_name="socialhub").render_welcome(
        "alice", "https://app.example.com/confirm/tok"
    )
    assert subject == "Finish registration with socialhub"
    assert "Hi alice" in body
    assert 'href="https://app.example.com/confirm/tok"' in body


def test_renderer_escapes_user_input() -> None:
    _, body = MailTemplateRenderer().render_welcome("<b>x</b>", "https://a/confirm/t")
    assert "<b>x</b>" not in body
    assert "&lt;b&gt;" in body


def test_unknown_template_raises_key_error() -> None:
    with pytest.raises(KeyError):
        MailTemplateRenderer().render("nope", {})


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def test_sendgrid_posts_message() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(202)

    async with _client(handler) as http:
        mailer = SendGridMailer("key", "noreply@x.com", http_client=http)
        await mailer.send("a@x.com", "Subject", "<p>Body</p>")

    assert seen[0].headers["Authorization"] == "Bearer key"
    assert b'"a@x.com"' in seen[0].content


async def test_sendgrid_rejection_raises_mail_delivery() -> None:
    async with _client(lambda request: httpx.Response(500)) as http:
        mailer = SendGridMailer("key", "noreply@x.com", http_client=http)
        with pytest.raises(MailDeliveryException) as exc_info:
            await mailer.send("a@x.com", "s", "b")
    assert exc_info.value.details == {"reason": "http_500"}


async def test_sendgrid_transport_error_raises_mail_delivery() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with _client(handler) as http:
        mailer = SendGridMailer("key", "noreply@x.com", http_client=http)
        with pytest.raises(MailDeliveryException):
            await mailer.send("a@x.com", "s", "b")


def test_build_mailer_defaults_to_log_only() -> None:
    assert isinstance(build_mailer(get_settings()), LogOnlyMailer)
