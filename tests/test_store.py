"""SQLAlchemy store boundary validation."""

import pytest

from nanushi.db_models import MissionRecord
from nanushi.errors import RecordValidationError
from tests._harness import make_sql_store, sample_mission


def test_missions_are_ordered_by_start_date(sql_store):
    sql_store.upsert_mission(sample_mission(id="early", startdate="2024-01-01"))

    ids = [m.id for m in sql_store.list_missions()]

    assert ids == ["early", "mission-1"]


def test_upsert_updates_in_place(sql_store):
    sql_store.upsert_mission(sample_mission(status="Completed", spots={"filled": 4, "total": 4}))

    mission = sql_store.get_mission("mission-1")

    assert mission.status.value == "Completed"
    assert mission.spots.filled == 4
    assert len(sql_store.list_missions()) == 1


def test_unknown_mission_is_none(sql_store):
    assert sql_store.get_mission("missing") is None


@pytest.mark.parametrize(
    "field, value",
    [("status", "Someday"), ("techstack_json", "{not json"), ("teamsize", -3)],
)
def test_malformed_rows_are_rejected(sql_store, field, value):
    with sql_store._session_factory() as db:
        row = db.get(MissionRecord, "mission-1")
        setattr(row, field, value)
        db.commit()

    with pytest.raises(RecordValidationError):
        sql_store.get_mission("mission-1")


def test_init_db_creates_missing_state_dir(tmp_path):
    db_path = tmp_path / "fresh" / "state" / "nanushi.sqlite3"

    store = make_sql_store(db_path)

    assert db_path.parent.is_dir()
    assert store.list_missions() == []
