"""Pydantic models shared across the nanushi backend."""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _clean_email(v: str) -> str:
    s = (v or "").strip().lower()
    if not _EMAIL_RE.match(s):
        raise ValueError("invalid email address")
    return s


# --- Core enums -------------------------------------------------------------

class MissionStatus(str, Enum):
    RECRUITING = "Recruiting"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class UserStatus(str, Enum):
    WAITLIST = "waitlist"
    ACTIVE = "active"
    INACTIVE = "inactive"


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


# --- Store records ----------------------------------------------------------

class Spots(BaseModel):
    filled: int = Field(0, ge=0)
    total: int = Field(0, ge=0)


class Mission(BaseModel):
    """A time-boxed team project that applicants can join."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = Field(..., min_length=1)
    description: str = ""
    content: str = ""
    status: MissionStatus
    techstack: list[str] = Field(default_factory=list)
    duration: str = ""
    teamsize: int = Field(0, ge=0)
    spots: Spots = Field(default_factory=Spots)
    startdate: Optional[str] = None
    difficulty: Optional[str] = None


class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    status: UserStatus
    created_at: datetime
    updated_at: datetime


class StoredApplication(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    mission_id: str
    applicant_email: str
    application_data: dict[str, Any] = Field(default_factory=dict)
    status: ApplicationStatus = ApplicationStatus.PENDING
    created_at: Optional[datetime] = None


# --- Requests ---------------------------------------------------------------

class _CamelModel(BaseModel):
    # The site's forms post camelCase keys; snake_case is accepted too.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ApplicantProfile(_CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: str
    github_profile: Optional[str] = None
    years_of_experience: Optional[Literal["0-1", "1-2", "2-4", "4+"]] = None
    recent_project: Optional[str] = None
    weekly_commitment: Optional[Literal["1-5", "5-10", "10-15", "15-20", "20+"]] = None
    preferred_working_hours: Optional[str] = None
    timezone: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _clean_email(v)

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name is required")
        return v


class ApplicationRequest(_CamelModel):
    mission_id: str = Field(..., min_length=1)
    application: ApplicantProfile
    is_guest: bool = True


class EmailRequest(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _clean_email(v)


# --- Responses --------------------------------------------------------------

class ApplicationAccepted(BaseModel):
    success: bool = True
    message: str = "Application submitted"
    application_id: str
    mission_id: str
    status: ApplicationStatus
    # Email is best effort; the stored application is the success signal.
    notification_sent: bool


class WaitlistResponse(BaseModel):
    success: bool
    message: str
    data: Optional[User] = None


class SimpleResponse(BaseModel):
    success: bool
    message: str


__all__ = [
    "MissionStatus",
    "UserStatus",
    "ApplicationStatus",
    "Spots",
    "Mission",
    "User",
    "StoredApplication",
    "ApplicantProfile",
    "ApplicationRequest",
    "EmailRequest",
    "ApplicationAccepted",
    "WaitlistResponse",
    "SimpleResponse",
]
