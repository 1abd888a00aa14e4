"""Resend client against a mocked transport."""

import json

import httpx
import pytest

from nanushi.errors import MailError
from nanushi.mail import EmailMessage, ResendMailer

MESSAGE = EmailMessage("nanushi <hello@nanushi.org>", "ada@example.com", "Hi", "<p>hi</p>")


@pytest.mark.anyio("asyncio")
async def test_send_posts_one_email():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "re_123"})

    mailer = ResendMailer("re_key", api_url="https://resend.test/", transport=httpx.MockTransport(handler))

    assert await mailer.send(MESSAGE) == "re_123"

    (request,) = seen
    assert str(request.url) == "https://resend.test/emails"
    assert request.headers["Authorization"] == "Bearer re_key"
    assert json.loads(request.content) == {
        "from": "nanushi <hello@nanushi.org>",
        "to": ["ada@example.com"],
        "subject": "Hi",
        "html": "<p>hi</p>",
    }


@pytest.mark.anyio("asyncio")
async def test_provider_error_raises_without_retry():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500, text="boom")

    mailer = ResendMailer("re_key", transport=httpx.MockTransport(handler))

    with pytest.raises(MailError):
        await mailer.send(MESSAGE)
    assert len(calls) == 1


@pytest.mark.anyio("asyncio")
async def test_network_error_raises_mail_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    mailer = ResendMailer("re_key", transport=httpx.MockTransport(handler))

    with pytest.raises(MailError):
        await mailer.send(MESSAGE)


@pytest.mark.anyio("asyncio")
async def test_missing_api_key_raises():
    with pytest.raises(MailError):
        await ResendMailer(None).send(MESSAGE)
