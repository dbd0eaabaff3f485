"""Transactional mail templates: template key -> subject/body (Jinja)."""

from __future__ import annotations

from typing import Any

from jinja2 import Environment, Template

WELCOME_TEMPLATE = "user_invitation"

# In-repo template definitions: key -> (subject_template, body_template)
_DEFAULT_TEMPLATES: dict[str, tuple[str, str]] = {
    WELCOME_TEMPLATE: (
        "Finish registration with {{ app_name }}",
        "<p>Hi {{ username }},</p>\n"
        "<p>Thanks for signing up for {{ app_name }}. Before you can start using "
        "your account, please confirm your email address:</p>\n"
        '<p><a href="{{ activation_url }}">{{ activation_url }}</a></p>\n'
        "<p>If you did not sign up, you can ignore this email.</p>",
    ),
}


class MailTemplateRenderer:
    """Renders subject and body for transactional mail from a template key."""

    def __init__(
        self,
        app_name: str = "socialhub",
        templates: dict[str, tuple[str, str]] | None = None,
    ) -> None:
        """Initialize with optional template dict; falls back to _DEFAULT_TEMPLATES."""
        self._app_name = app_name
        self._env = Environment(autoescape=True)
        self._compiled: dict[str, tuple[Template, Template]] = {}
        for key, (sub_str, body_str) in (templates or _DEFAULT_TEMPLATES).items():
            self._compiled[key] = (
                self._env.from_string(sub_str),
                self._env.from_string(body_str),
            )

    def render(self, template_key: str, context: dict[str, Any]) -> tuple[str, str]:
        """Render subject and body for the template key. Raises KeyError if key unknown."""
        if template_key not in self._compiled:
            raise KeyError(f"Unknown mail template: {template_key}")
        ctx = {"app_name": self._app_name, **context}
        subject_tpl, body_tpl = self._compiled[template_key]
        return subject_tpl.render(**ctx), body_tpl.render(**ctx)

    def render_welcome(self, username: str, activation_url: str) -> tuple[str, str]:
        return self.render(
            WELCOME_TEMPLATE,
            {"username": username, "activation_url": activation_url},
        )
