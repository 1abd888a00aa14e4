from __future__ import annotations

from loguru import logger

from nanushi.errors import MailError
from nanushi.mail import EmailMessage, Mailer
from nanushi.metrics import EMAILS


async def deliver(mailer: Mailer, message: EmailMessage, *, template: str) -> str:
    """Single send attempt. Raises MailError; callers decide whether it is fatal."""
    try:
        message_id = await mailer.send(message)
    except MailError:
        EMAILS.labels(template, "failed").inc()
        logger.exception("email send failed", template=template)
        raise
    EMAILS.labels(template, "sent").inc()
    return message_id


async def deliver_best_effort(mailer: Mailer, message: EmailMessage, *, template: str) -> bool:
    try:
        await deliver(mailer, message, template=template)
    except MailError:
        return False
    return True
