from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from nanushi.mail.client import EmailMessage

TEMPLATE_DIR = Path(__file__).parent / "templates"


class EmailTemplates:
    """Renders the site's transactional emails."""

    def __init__(self, *, mail_from: str, welcome_from: str, site_url: str):
        self.mail_from = mail_from
        self.welcome_from = welcome_from
        self.site_url = site_url.rstrip("/")
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
        )

    def _render(self, name: str, /, **context: object) -> str:
        return self.env.get_template(name).render(site_url=self.site_url, **context)

    def application_confirmation(
        self,
        *,
        to: str,
        name: str,
        mission_id: str,
        mission_title: str,
        weekly_commitment: Optional[str] = None,
    ) -> EmailMessage:
        html = self._render(
            "application_confirmation.html",
            name=name,
            mission_id=mission_id,
            mission_title=mission_title,
            weekly_commitment=weekly_commitment,
        )
        return EmailMessage(self.mail_from, to, f"Application Received - {mission_title}", html)

    def waitlist_confirmation(self, *, to: str) -> EmailMessage:
        html = self._render("waitlist_confirmation.html", email=to)
        return EmailMessage(self.mail_from, to, "Welcome to nanushi", html)

    def welcome(self, *, to: str) -> EmailMessage:
        html = self._render("welcome.html")
        return EmailMessage(self.welcome_from, to, "welcome to nanushi", html)
