from __future__ import annotations

from datetime import datetime, timezone
from typing import Type, TypeVar

import frontmatter
import yaml
from pydantic import ValidationError

from nanushi.content.models import ContentItem

ItemT = TypeVar("ItemT", bound=ContentItem)


class ContentParseError(ValueError):
    """The document's front matter is missing, unparseable, or the wrong shape."""


def parse_document(text: str, *, slug: str, model: Type[ItemT]) -> ItemT:
    """
    Split a front matter header from the markdown body and validate both.

    Raises ContentParseError on malformed YAML or header values that do not
    fit `model`.
    """
    try:
        post = frontmatter.loads(text)
    except yaml.YAMLError as e:
        raise ContentParseError(f"invalid front matter in {slug!r}: {e}") from e

    data = dict(post.metadata)
    data["slug"] = slug
    data["body"] = post.content
    try:
        return model.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise ContentParseError(f"invalid front matter in {slug!r}: {fields}") from e


def dump_document(item: ContentItem) -> str:
    """Inverse of parse_document: front matter header plus body."""
    meta = item.model_dump(exclude={"slug", "body", "read_time"}, exclude_defaults=True)
    return frontmatter.dumps(frontmatter.Post(item.body, **meta))


def placeholder(model: Type[ItemT], *, slug: str, kind: str) -> ItemT:
    return model.model_validate(
        {
            "slug": slug,
            "title": "Error",
            "date": datetime.now(timezone.utc).isoformat(),
            "tags": [],
            "body": f"# Error\nFailed to load {kind} content.",
            "description": f"Failed to load {kind} content",
            "excerpt": f"Failed to load {kind} content",
        }
    )
