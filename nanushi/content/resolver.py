"""Slug -> file resolution for blog posts and tutorial series."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping, Optional

from loguru import logger

from nanushi.config.paths import tutorial_chapters_dir
from nanushi.content.models import BlogPost, LookupResult, TutorialChapter
from nanushi.content.parser import ContentParseError, parse_document, placeholder
from nanushi.content.search import search_posts, top_tags
from nanushi.metrics import CONTENT_LOOKUPS

_SLUG_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


def is_valid_slug(slug: str) -> bool:
    return bool(slug) and bool(_SLUG_RE.match(slug))


def _date_sort_key(post: BlogPost) -> datetime:
    s = (post.date or "").strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return datetime.min
    # aware dates are compared as UTC instants, naive ones as written
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


class BlogCollection:
    """
    Blog posts stored as `<slug>.md` in one directory.

    Nothing is cached; every call reads from disk.
    """

    name = "blog"

    def __init__(self, posts_dir: Path):
        self.posts_dir = Path(posts_dir)

    def _path_for(self, slug: str) -> Optional[Path]:
        if not is_valid_slug(slug):
            return None
        p = self.posts_dir / f"{slug}.md"
        return p if p.is_file() else None

    def slugs(self) -> list[str]:
        if not self.posts_dir.is_dir():
            return []
        return sorted(p.stem for p in self.posts_dir.glob("*.md") if p.is_file())

    def resolve(self, slug: str) -> LookupResult[BlogPost]:
        path = self._path_for(slug)
        if path is None:
            CONTENT_LOOKUPS.labels(self.name, "not_found").inc()
            return LookupResult("not_found")

        try:
            post = parse_document(path.read_text(encoding="utf-8"), slug=slug, model=BlogPost)
        except (ContentParseError, OSError, UnicodeDecodeError) as e:
            CONTENT_LOOKUPS.labels(self.name, "error").inc()
            logger.warning("failed to load blog post", slug=slug, error=str(e))
            return LookupResult("error", placeholder(BlogPost, slug=slug, kind="blog post"), str(e))

        CONTENT_LOOKUPS.labels(self.name, "found").inc()
        return LookupResult("found", post)

    def list_all(self) -> list[BlogPost]:
        """Every parseable post, newest first. Broken posts are logged and skipped."""
        posts: list[BlogPost] = []
        for slug in self.slugs():
            result = self.resolve(slug)
            if result.found and result.item is not None:
                posts.append(result.item)
        posts.sort(key=_date_sort_key, reverse=True)
        return posts

    def search(self, query: str) -> list[BlogPost]:
        return search_posts(self.list_all(), query)

    def top_tags(self, limit: int = 5) -> list[dict[str, object]]:
        return top_tags(self.list_all(), limit)


class TutorialSeries:
    """A tutorial whose chapters are addressed through a fixed slug -> filename table."""

    def __init__(self, key: str, title: str, chapters_dir: Path, chapter_files: Mapping[str, str]):
        self.key = key
        self.title = title
        self.chapters_dir = Path(chapters_dir)
        self.chapter_files = dict(chapter_files)

    @property
    def collection(self) -> str:
        return f"tutorials/{self.key}"

    def resolve(self, slug: str) -> LookupResult[TutorialChapter]:
        file_name = self.chapter_files.get(slug)
        if file_name is None:
            CONTENT_LOOKUPS.labels(self.collection, "not_found").inc()
            return LookupResult("not_found")

        path = self.chapters_dir / file_name
        try:
            chapter = parse_document(path.read_text(encoding="utf-8"), slug=slug, model=TutorialChapter)
        except (ContentParseError, OSError, UnicodeDecodeError) as e:
            # a mapped chapter that is missing or broken renders as an error page
            CONTENT_LOOKUPS.labels(self.collection, "error").inc()
            logger.warning("failed to load tutorial chapter", series=self.key, slug=slug, error=str(e))
            return LookupResult("error", placeholder(TutorialChapter, slug=slug, kind="tutorial"), str(e))

        CONTENT_LOOKUPS.labels(self.collection, "found").inc()
        return LookupResult("found", chapter)

    def table_of_contents(self) -> list[dict[str, object]]:
        toc: list[dict[str, object]] = []
        for slug in self.chapter_files:
            result = self.resolve(slug)
            item = result.item
            toc.append(
                {
                    "slug": slug,
                    "title": item.title if item is not None and result.found else slug,
                    "chapter": item.chapter if item is not None and result.found else None,
                    "available": result.found,
                }
            )
        return toc


REACT_NATIVE_FUNDAMENTALS: dict[str, str] = {
    "introduction": "01-introduction.md",
    "setup": "02-setup.md",
    "first-app": "03-first-app.md",
    "js-ts-fundamentals": "04-js-ts-fundamentals.md",
    "components": "05-components.md",
    "styling": "06-styling.md",
    "advanced-ui": "07-advanced-ui.md",
    "navigation": "08-navigation.md",
    "forms": "09-forms.md",
    "state": "10-state.md",
    "api": "11-api.md",
    "persistence": "12-persistence.md",
    "testing": "13-testing.md",
    "performance": "14-performance.md",
    "code-quality": "15-code-quality.md",
    "native-modules": "16-native-modules.md",
    "device-features": "17-device-features.md",
    "platform-features": "18-platform-features.md",
    "security": "19-security.md",
    "build-release": "20-build-release.md",
    "production": "21-production.md",
    "i18n": "22-i18n.md",
    "accessibility": "23-accessibility.md",
    "architecture": "24-architecture.md",
}


def default_tutorials(content_root: Path) -> dict[str, TutorialSeries]:
    key = "react-native-fundamentals"
    series = TutorialSeries(
        key=key,
        title="React Native Fundamentals",
        chapters_dir=tutorial_chapters_dir(key, content_root),
        chapter_files=REACT_NATIVE_FUNDAMENTALS,
    )
    return {series.key: series}
