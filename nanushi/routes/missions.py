"""Mission listing and application routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from nanushi.content.render import render_markdown
from nanushi.mail import EmailTemplates, Mailer
from nanushi.routes.deps import get_mailer, get_store, get_templates
from nanushi.schemas import ApplicationAccepted, ApplicationRequest, Mission
from nanushi.services.applications import submit_application
from nanushi.services.missions import get_mission, list_missions
from nanushi.store import MissionStore

router = APIRouter()


@router.get("/missions", summary="List missions", tags=["Missions"], response_model=list[Mission])
def missions(store: MissionStore = Depends(get_store)) -> list[Mission]:
    return list_missions(store)


@router.get("/missions/{mission_id}", summary="Mission detail", tags=["Missions"])
def mission_detail(mission_id: str, store: MissionStore = Depends(get_store)) -> dict[str, Any]:
    mission = get_mission(store, mission_id)
    payload = mission.model_dump(mode="json")
    payload["html"] = render_markdown(mission.content)
    return payload


@router.post(
    "/api/missions/applications",
    summary="Apply to a mission",
    tags=["Missions"],
    response_model=ApplicationAccepted,
)
async def apply(
    req: ApplicationRequest,
    store: MissionStore = Depends(get_store),
    mailer: Mailer = Depends(get_mailer),
    templates: EmailTemplates = Depends(get_templates),
) -> ApplicationAccepted:
    return await submit_application(req, store=store, mailer=mailer, templates=templates)
