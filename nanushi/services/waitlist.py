"""Waitlist sign-up and welcome emails."""

from __future__ import annotations

from anyio import to_thread
from loguru import logger

from nanushi.errors import AlreadyOnWaitlistError, MailError, UpstreamError
from nanushi.mail import EmailTemplates, Mailer
from nanushi.metrics import WAITLIST_JOINS
from nanushi.schemas import SimpleResponse, User, UserStatus, WaitlistResponse
from nanushi.services.notify import deliver, deliver_best_effort
from nanushi.store import MissionStore

ERR_WAITLIST = "Something went wrong while joining the waitlist. Please try again."
ERR_WELCOME = "Failed to send welcome email"


def record_user(email: str, store: MissionStore) -> User:
    """Blocking store half of a waitlist join; runs in a worker thread."""
    if store.find_user(email) is not None:
        raise AlreadyOnWaitlistError()
    return store.insert_user(email, UserStatus.WAITLIST)


async def join_waitlist(
    email: str,
    *,
    store: MissionStore,
    mailer: Mailer,
    templates: EmailTemplates,
) -> WaitlistResponse:
    """
    Add `email` to the waitlist once.

    An email that is already known raises AlreadyOnWaitlistError and creates
    nothing. The welcome email is best effort and does not affect the result.
    """
    try:
        user = await to_thread.run_sync(record_user, email, store)
    except AlreadyOnWaitlistError:
        WAITLIST_JOINS.labels("already_exists").inc()
        raise
    except UpstreamError as e:
        WAITLIST_JOINS.labels("error").inc()
        raise UpstreamError(ERR_WAITLIST) from e

    WAITLIST_JOINS.labels("joined").inc()
    logger.info("waitlist joined", user_id=user.id)

    await deliver_best_effort(mailer, templates.waitlist_confirmation(to=user.email), template="waitlist_confirmation")

    return WaitlistResponse(success=True, message="Successfully joined the waitlist!", data=user)


async def send_welcome(email: str, *, mailer: Mailer, templates: EmailTemplates) -> SimpleResponse:
    try:
        await deliver(mailer, templates.welcome(to=email), template="welcome")
    except MailError as e:
        raise UpstreamError(ERR_WELCOME) from e
    return SimpleResponse(success=True, message="Welcome email sent")
