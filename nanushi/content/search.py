from __future__ import annotations

from typing import Iterable, Sequence

from nanushi.content.models import BlogPost


def search_posts(posts: Sequence[BlogPost], query: str) -> list[BlogPost]:
    """
    Case-insensitive substring filter over title, excerpt, body and tags.

    A blank query returns every post. Order is the order of `posts`.
    """
    q = (query or "").strip().lower()
    if not q:
        return list(posts)

    def _matches(post: BlogPost) -> bool:
        if q in post.title.lower():
            return True
        if q in post.excerpt.lower():
            return True
        if q in post.body.lower():
            return True
        return any(q in tag.lower() for tag in post.tags)

    return [p for p in posts if _matches(p)]


def top_tags(posts: Iterable[BlogPost], limit: int = 5) -> list[dict[str, object]]:
    """Most used tags, highest count first. Ties keep first-seen order."""
    counts: dict[str, int] = {}
    for post in posts:
        for tag in post.tags:
            counts[tag] = counts.get(tag, 0) + 1

    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [{"tag": tag, "count": count} for tag, count in ranked[: max(0, limit)]]
