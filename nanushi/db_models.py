# nanushi/db_models.py
from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow():
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserRecord(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(320), nullable=False, unique=True, index=True)
    # waitlist | active | inactive
    status = Column(String(32), nullable=False, default="waitlist")

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )


class MissionRecord(Base):
    __tablename__ = "missions"

    id = Column(String(64), primary_key=True, default=new_id)
    title = Column(String(256), nullable=False)
    description = Column(Text, nullable=False, default="")
    content = Column(Text, nullable=False, default="")
    # Recruiting | In Progress | Completed
    status = Column(String(32), nullable=False, default="Recruiting")
    techstack_json = Column(Text, nullable=False, default="[]")
    duration = Column(String(64), nullable=False, default="")
    teamsize = Column(Integer, nullable=False, default=0)
    spots_filled = Column(Integer, nullable=False, default=0)
    spots_total = Column(Integer, nullable=False, default=0)
    startdate = Column(String(32), nullable=True, index=True)
    difficulty = Column(String(32), nullable=True)


class MissionApplicationRecord(Base):
    __tablename__ = "mission_applications"
    __table_args__ = (
        UniqueConstraint("mission_id", "applicant_email", name="uq_mission_applications_mission_email"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    mission_id = Column(String(64), nullable=False, index=True)
    user_id = Column(String(36), nullable=True)
    applicant_email = Column(String(320), nullable=False)
    application_data_json = Column(Text, nullable=False, default="{}")
    status = Column(String(32), nullable=False, default="pending")

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
