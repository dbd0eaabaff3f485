"""Mail senders: log-only (development) and SendGrid (HTTP API)."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx

from app.core.config import Settings
from app.domain.exceptions import MailDeliveryException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class LogOnlyMailer:
    """IMailer implementation that logs instead of sending email.

    Use when no mail provider is configured (mail_backend=log).
    """

    async def send(self, to_email: str, subject: str, body: str) -> None:
        """Log the message; no actual email sent."""
        logger.info("Mail: would send to %s (subject=%r)", to_email, (subject or "")[:80])
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Mail body length: %d chars", len(body or ""))


class SendGridMailer:
    """IMailer implementation backed by the SendGrid v3 mail/send API.

    Any transport error or non-2xx response raises MailDeliveryException.
    """

    def __init__(
        self,
        api_key: str,
        from_email: str,
        *,
        api_url: str = "https://api.sendgrid.com/v3/mail/send",
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("api_key is required")
        self._api_key = api_key
        self._from_email = from_email
        self._api_url = api_url
        self._timeout = timeout
        self._shared_http = http_client

    @asynccontextmanager
    async def _http_cm(self):
        """Yield shared HTTP client or a short-lived one (connection reuse when shared)."""
        if self._shared_http is not None:
            yield self._shared_http
            return
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            yield client

    async def send(self, to_email: str, subject: str, body: str) -> None:
        payload = {
            "personalizations": [{"to": [{"email": to_email}]}],
            "from": {"email": self._from_email},
            "subject": subject,
            "content": [{"type": "text/html", "value": body}],
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}
        try:
            async with self._http_cm() as client:
                response = await client.post(self._api_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("SendGrid request failed: %s", type(e).__name__)
            raise MailDeliveryException(reason=type(e).__name__) from e
        if not response.is_success:
            logger.warning("SendGrid rejected message: HTTP %s", response.status_code)
            raise MailDeliveryException(reason=f"http_{response.status_code}")
        logger.info("Mail sent to %s", to_email)


def build_mailer(settings: Settings, http_client: httpx.AsyncClient | None = None) -> LogOnlyMailer | SendGridMailer:
    """Return the mailer selected by settings.mail_backend."""
    if settings.mail_backend == "sendgrid" and settings.sendgrid_api_key is not None:
        return SendGridMailer(
            settings.sendgrid_api_key.get_secret_value(),
            settings.mail_from,
            api_url=settings.sendgrid_api_url,
            http_client=http_client,
        )
    return LogOnlyMailer()
