# nanushi/store.py
from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Protocol

from loguru import logger
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from nanushi.db_models import (
    MissionApplicationRecord,
    MissionRecord,
    UserRecord,
    normalize_email,
)
from nanushi.errors import (
    AlreadyOnWaitlistError,
    DuplicateApplicationError,
    RecordValidationError,
    UpstreamError,
)
from nanushi.schemas import Mission, StoredApplication, User, UserStatus


class MissionStore(Protocol):
    """
    Everything the services need from the data store.

    Implementations raise:
      - DuplicateApplicationError / AlreadyOnWaitlistError when a uniqueness
        constraint rejects an insert
      - UpstreamError for any other store fault
      - RecordValidationError when a row does not match its model
    """

    def list_missions(self) -> list[Mission]: ...

    def get_mission(self, mission_id: str) -> Optional[Mission]: ...

    def find_application(self, mission_id: str, email: str) -> Optional[StoredApplication]: ...

    def insert_application(
        self, mission_id: str, email: str, application_data: dict[str, Any]
    ) -> StoredApplication: ...

    def find_user(self, email: str) -> Optional[User]: ...

    def insert_user(self, email: str, status: UserStatus = UserStatus.WAITLIST) -> User: ...


# --- row -> model -----------------------------------------------------------

def _loads(raw: Optional[str], default: Any) -> Any:
    if raw is None or not str(raw).strip():
        return default
    return json.loads(raw)


def mission_from_row(row: MissionRecord) -> Mission:
    try:
        return Mission.model_validate(
            {
                "id": row.id,
                "title": row.title,
                "description": row.description or "",
                "content": row.content or "",
                "status": row.status,
                "techstack": _loads(row.techstack_json, []),
                "duration": row.duration or "",
                "teamsize": row.teamsize or 0,
                "spots": {"filled": row.spots_filled or 0, "total": row.spots_total or 0},
                "startdate": row.startdate,
                "difficulty": row.difficulty,
            }
        )
    except (ValidationError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        logger.warning("malformed mission row", mission_id=row.id, error=type(e).__name__)
        raise RecordValidationError() from e


def application_from_row(row: MissionApplicationRecord) -> StoredApplication:
    try:
        return StoredApplication.model_validate(
            {
                "id": row.id,
                "mission_id": row.mission_id,
                "applicant_email": row.applicant_email,
                "application_data": _loads(row.application_data_json, {}),
                "status": row.status,
                "created_at": row.created_at,
            }
        )
    except (ValidationError, ValueError) as e:
        logger.warning("malformed application row", application_id=row.id, error=type(e).__name__)
        raise RecordValidationError() from e


def user_from_row(row: UserRecord) -> User:
    try:
        return User.model_validate(
            {
                "id": row.id,
                "email": row.email,
                "status": row.status,
                "created_at": row.created_at,
                "updated_at": row.updated_at,
            }
        )
    except ValidationError as e:
        logger.warning("malformed user row", user_id=row.id)
        raise RecordValidationError() from e


# --- SQLAlchemy implementation ----------------------------------------------

class SqlMissionStore:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def _session(self, op: str) -> Iterator[Session]:
        db: Session = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as e:
            db.rollback()
            logger.opt(exception=e).error("store operation failed", op=op)
            raise UpstreamError() from e
        finally:
            db.close()

    def list_missions(self) -> list[Mission]:
        with self._session("list_missions") as db:
            rows = db.query(MissionRecord).order_by(MissionRecord.startdate.asc()).all()
            return [mission_from_row(r) for r in rows]

    def get_mission(self, mission_id: str) -> Optional[Mission]:
        with self._session("get_mission") as db:
            row = db.query(MissionRecord).filter(MissionRecord.id == mission_id).one_or_none()
            return mission_from_row(row) if row is not None else None

    def upsert_mission(self, mission: Mission) -> None:
        with self._session("upsert_mission") as db:
            row = db.get(MissionRecord, mission.id) or MissionRecord(id=mission.id)
            row.title = mission.title
            row.description = mission.description
            row.content = mission.content
            row.status = mission.status.value
            row.techstack_json = json.dumps(mission.techstack)
            row.duration = mission.duration
            row.teamsize = mission.teamsize
            row.spots_filled = mission.spots.filled
            row.spots_total = mission.spots.total
            row.startdate = mission.startdate
            row.difficulty = mission.difficulty
            db.add(row)
            db.commit()

    def find_application(self, mission_id: str, email: str) -> Optional[StoredApplication]:
        with self._session("find_application") as db:
            row = (
                db.query(MissionApplicationRecord)
                .filter(MissionApplicationRecord.mission_id == mission_id)
                .filter(MissionApplicationRecord.applicant_email == normalize_email(email))
                .one_or_none()
            )
            return application_from_row(row) if row is not None else None

    def insert_application(
        self, mission_id: str, email: str, application_data: dict[str, Any]
    ) -> StoredApplication:
        row = MissionApplicationRecord(
            mission_id=mission_id,
            user_id=None,
            applicant_email=normalize_email(email),
            application_data_json=json.dumps(application_data),
            status="pending",
        )
        with self._session("insert_application") as db:
            db.add(row)
            try:
                db.commit()
            except IntegrityError as e:
                # The unique constraint is the authoritative duplicate signal.
                db.rollback()
                raise DuplicateApplicationError() from e
            db.refresh(row)
            return application_from_row(row)

    def find_user(self, email: str) -> Optional[User]:
        with self._session("find_user") as db:
            row = db.query(UserRecord).filter(UserRecord.email == normalize_email(email)).one_or_none()
            return user_from_row(row) if row is not None else None

    def insert_user(self, email: str, status: UserStatus = UserStatus.WAITLIST) -> User:
        row = UserRecord(email=normalize_email(email), status=status.value)
        with self._session("insert_user") as db:
            db.add(row)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise AlreadyOnWaitlistError() from e
            db.refresh(row)
            return user_from_row(row)
