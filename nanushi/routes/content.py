"""Blog and tutorial routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from nanushi.content import BlogCollection, BlogPost, TutorialChapter, TutorialSeries
from nanushi.content.render import render_markdown
from nanushi.errors import NotFoundError
from nanushi.routes.deps import get_blog, get_tutorials

router = APIRouter()

SITE_NAME = "nanushi"


def _post_summary(post: BlogPost) -> dict[str, Any]:
    return {
        "slug": post.slug,
        "title": post.title.lower(),
        "excerpt": post.excerpt,
        "date": post.date,
        "read_time": post.read_time,
        "tags": list(post.tags),
    }


def _post_detail(post: BlogPost, *, error: bool) -> dict[str, Any]:
    return {
        "slug": post.slug,
        "title": post.title.lower(),
        "date": post.date.lower(),
        "read_time": post.read_time.lower(),
        "excerpt": post.excerpt,
        "tags": list(post.tags),
        "html": render_markdown(post.body, title=post.title),
        "error": error,
        "meta": {
            "title": f"{post.title} - {SITE_NAME}",
            "description": post.excerpt,
            "type": "article",
            "published_time": post.date,
            "authors": [SITE_NAME],
            "tags": list(post.tags),
        },
    }


def _chapter_detail(series: TutorialSeries, chapter: TutorialChapter, *, error: bool) -> dict[str, Any]:
    return {
        "series": series.key,
        "slug": chapter.slug,
        "title": chapter.title,
        "date": chapter.date.lower(),
        "chapter": chapter.chapter,
        "section": chapter.section,
        "tags": list(chapter.tags),
        "html": render_markdown(chapter.body),
        "error": error,
        "meta": {
            "title": f"{chapter.title} - {series.title}",
            "description": chapter.description,
            "keywords": ", ".join(chapter.tags),
        },
    }


@router.get("/blog", summary="List or search blog posts", tags=["Blog"])
def blog_index(
    q: str = Query("", description="Case-insensitive search over title, excerpt, body and tags"),
    blog: BlogCollection = Depends(get_blog),
) -> dict[str, Any]:
    posts = blog.search(q)
    return {"query": q.strip(), "count": len(posts), "posts": [_post_summary(p) for p in posts]}


@router.get("/blog/tags/top", summary="Most used blog tags", tags=["Blog"])
def blog_top_tags(
    limit: int = Query(5, ge=1, le=50),
    blog: BlogCollection = Depends(get_blog),
) -> list[dict[str, Any]]:
    return blog.top_tags(limit)


@router.get("/blog/{slug}", summary="Render one blog post", tags=["Blog"])
def blog_post(slug: str, blog: BlogCollection = Depends(get_blog)) -> dict[str, Any]:
    result = blog.resolve(slug)
    if result.item is None:
        raise NotFoundError("Post not found")
    return _post_detail(result.item, error=not result.found)


def _series_or_404(series: str, tutorials: dict[str, TutorialSeries]) -> TutorialSeries:
    found = tutorials.get(series)
    if found is None:
        raise NotFoundError("Tutorial not found")
    return found


@router.get("/tutorials/{series}", summary="Tutorial table of contents", tags=["Tutorials"])
def tutorial_index(
    series: str,
    tutorials: dict[str, TutorialSeries] = Depends(get_tutorials),
) -> dict[str, Any]:
    s = _series_or_404(series, tutorials)
    return {"series": s.key, "title": s.title, "chapters": s.table_of_contents()}


@router.get("/tutorials/{series}/{slug}", summary="Render one tutorial chapter", tags=["Tutorials"])
def tutorial_chapter(
    series: str,
    slug: str,
    tutorials: dict[str, TutorialSeries] = Depends(get_tutorials),
) -> dict[str, Any]:
    s = _series_or_404(series, tutorials)
    result = s.resolve(slug)
    if result.item is None:
        raise NotFoundError("Page not found")
    return _chapter_detail(s, result.item, error=not result.found)
