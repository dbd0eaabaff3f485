"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.invitation_workflow import InvitationWorkflow
from app.infrastructure.services.mail_service import (
    LogOnlyMailer,
    SendGridMailer,
    build_mailer,
)
from app.infrastructure.services.mail_template_renderer import MailTemplateRenderer
from app.infrastructure.services.user_account_service import UserAccountService

__all__ = [
    "InvitationWorkflow",
    "LogOnlyMailer",
    "MailTemplateRenderer",
    "SendGridMailer",
    "UserAccountService",
    "build_mailer",
]
