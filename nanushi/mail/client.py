"""Resend email client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

import httpx
from loguru import logger

from nanushi.errors import MailError


@dataclass(frozen=True)
class EmailMessage:
    from_addr: str
    to: str
    subject: str
    html: str


class Mailer(Protocol):
    async def send(self, message: EmailMessage) -> str:
        """Send one message. Returns the provider's message id, raises MailError."""
        ...


class ResendMailer:
    """
    One POST to Resend per message. No retry: a failed send is reported to
    the caller, which decides whether it matters.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        api_url: str = "https://api.resend.com",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key.strip() if api_key else ""
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def send(self, message: EmailMessage) -> str:
        if not self.api_key:
            raise MailError("resend api key is not configured")

        payload = {
            "from": message.from_addr,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
        }
        url = f"{self.api_url}/emails"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, headers=self._headers(), json=payload)
        except httpx.HTTPError as e:
            raise MailError(f"resend request failed: {type(e).__name__}") from e

        if response.status_code >= 400:
            logger.warning(
                "resend rejected email",
                subject=message.subject,
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise MailError(f"resend returned {response.status_code}")

        try:
            message_id = str(response.json().get("id") or "")
        except ValueError:
            message_id = ""
        logger.info("email sent", subject=message.subject, message_id=message_id)
        return message_id
