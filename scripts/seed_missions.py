#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
from pathlib import Path

from nanushi.config import get_settings
from nanushi.db import init_db, make_engine, make_session_factory
from nanushi.schemas import Mission
from nanushi.store import SqlMissionStore


def load_missions(path: Path) -> list[Mission]:
    """Validate every record before anything is written."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    return [Mission.model_validate(item) for item in payload or []]


def main() -> None:
    parser = argparse.ArgumentParser(description="Upsert missions from a JSON file.")
    parser.add_argument("path", nargs="?", default="data/missions.json")
    args = parser.parse_args()

    settings = get_settings()
    engine = make_engine(settings.resolved_db_url())
    init_db(engine)
    store = SqlMissionStore(make_session_factory(engine))

    missions = load_missions(Path(args.path))
    for mission in missions:
        store.upsert_mission(mission)
        print(f"ok upserted mission id={mission.id} status={mission.status.value}")


if __name__ == "__main__":
    main()
