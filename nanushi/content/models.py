"""Parsed content items: blog posts and tutorial chapters."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

WORDS_PER_MINUTE = 200


class ContentItem(BaseModel):
    """Common fields for any markdown document with a front matter header."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    slug: str
    title: str = Field(..., min_length=1)
    date: str = ""
    tags: list[str] = Field(default_factory=list)
    body: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, v: Any) -> Any:
        # `title: 2024` arrives as an int
        if isinstance(v, (int, float, date, datetime)):
            return str(v)
        return v

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, v: Any) -> str:
        # YAML turns `date: 2024-01-15` into a date object
        if v is None:
            return ""
        if isinstance(v, (date, datetime)):
            return v.isoformat()
        return str(v)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [t.strip() for t in v.split(",") if t.strip()]
        if isinstance(v, (list, tuple)):
            return [t if isinstance(t, str) else str(t) for t in v if t is not None]
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def read_time(self) -> str:
        words = len(self.body.split()) or 1
        return f"{math.ceil(words / WORDS_PER_MINUTE)} min read"


class BlogPost(ContentItem):
    excerpt: str = ""


class TutorialChapter(ContentItem):
    description: str = ""
    chapter: int = 0
    section: int = 0


ItemT = TypeVar("ItemT", bound=ContentItem)


@dataclass(frozen=True)
class LookupResult(Generic[ItemT]):
    """
    Outcome of resolving a slug.

    status:
      - found: item is the parsed document
      - not_found: no file maps to the slug, item is None
      - error: the file exists but could not be parsed, item is a placeholder
    """

    status: Literal["found", "not_found", "error"]
    item: Optional[ItemT] = None
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status == "found"
