"""Waitlist and welcome email routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from nanushi.mail import EmailTemplates, Mailer
from nanushi.routes.deps import get_mailer, get_store, get_templates
from nanushi.schemas import EmailRequest, SimpleResponse, WaitlistResponse
from nanushi.services.waitlist import join_waitlist, send_welcome
from nanushi.store import MissionStore

router = APIRouter(prefix="/api", tags=["Signup"])


@router.post("/join-waitlist", summary="Join the waitlist", response_model=WaitlistResponse)
async def waitlist(
    req: EmailRequest,
    store: MissionStore = Depends(get_store),
    mailer: Mailer = Depends(get_mailer),
    templates: EmailTemplates = Depends(get_templates),
) -> WaitlistResponse:
    return await join_waitlist(req.email, store=store, mailer=mailer, templates=templates)


@router.post("/auth/welcome", summary="Send the welcome email", response_model=SimpleResponse)
async def welcome(
    req: EmailRequest,
    mailer: Mailer = Depends(get_mailer),
    templates: EmailTemplates = Depends(get_templates),
) -> SimpleResponse:
    return await send_welcome(req.email, mailer=mailer, templates=templates)
