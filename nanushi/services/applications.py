"""Mission application workflow."""

from __future__ import annotations

from anyio import to_thread
from loguru import logger

from nanushi.errors import DuplicateApplicationError, MissionNotFoundError, UpstreamError
from nanushi.mail import EmailTemplates, Mailer
from nanushi.metrics import APPLICATIONS
from nanushi.schemas import (
    ApplicationAccepted,
    ApplicationRequest,
    ApplicationStatus,
    Mission,
    StoredApplication,
)
from nanushi.services.notify import deliver_best_effort
from nanushi.store import MissionStore


def record_application(req: ApplicationRequest, store: MissionStore) -> tuple[Mission, StoredApplication]:
    """Duplicate check, mission lookup and insert. Blocking; runs in a worker thread."""
    profile = req.application
    if store.find_application(req.mission_id, profile.email) is not None:
        raise DuplicateApplicationError()

    mission = store.get_mission(req.mission_id)
    if mission is None:
        raise MissionNotFoundError()

    # A concurrent twin can pass the pre-check; the unique constraint
    # makes insert_application raise DuplicateApplicationError then.
    application = store.insert_application(
        req.mission_id,
        profile.email,
        profile.model_dump(by_alias=True, exclude_none=True),
    )
    return mission, application


async def submit_application(
    req: ApplicationRequest,
    *,
    store: MissionStore,
    mailer: Mailer,
    templates: EmailTemplates,
) -> ApplicationAccepted:
    """
    received -> duplicate check -> mission lookup -> insert -> notify.

    The stored application is the success signal. The confirmation email is
    attempted once; its outcome is reported as `notification_sent` and never
    undoes or fails the submission.

    Raises DuplicateApplicationError, MissionNotFoundError, UpstreamError.
    """
    profile = req.application
    log = logger.bind(mission_id=req.mission_id)

    try:
        mission, application = await to_thread.run_sync(record_application, req, store)
    except DuplicateApplicationError:
        APPLICATIONS.labels("duplicate").inc()
        log.info("duplicate application rejected")
        raise
    except MissionNotFoundError:
        APPLICATIONS.labels("mission_not_found").inc()
        log.info("application for unknown mission")
        raise
    except UpstreamError:
        APPLICATIONS.labels("error").inc()
        raise

    APPLICATIONS.labels("accepted").inc()
    log.info("application stored", application_id=application.id)

    message = templates.application_confirmation(
        to=profile.email,
        name=profile.name,
        mission_id=mission.id,
        mission_title=mission.title,
        weekly_commitment=profile.weekly_commitment,
    )
    sent = await deliver_best_effort(mailer, message, template="application_confirmation")

    return ApplicationAccepted(
        success=True,
        message="Application submitted successfully" if sent else "Application submitted; confirmation email could not be sent",
        application_id=application.id,
        mission_id=application.mission_id,
        status=ApplicationStatus(application.status),
        notification_sent=sent,
    )
