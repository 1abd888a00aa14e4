"""Mission read helpers for the nanushi API."""

from __future__ import annotations

from nanushi.errors import MissionNotFoundError
from nanushi.schemas import Mission
from nanushi.store import MissionStore


def list_missions(store: MissionStore) -> list[Mission]:
    """Every mission, earliest start date first."""
    return store.list_missions()


def get_mission(store: MissionStore, mission_id: str) -> Mission:
    mission = store.get_mission(mission_id)
    if mission is None:
        raise MissionNotFoundError()
    return mission
