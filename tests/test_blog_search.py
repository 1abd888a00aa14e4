"""In-memory blog search and tag counts."""

import pytest

from nanushi.content import BlogCollection
from tests._harness import post_text, write_post


@pytest.fixture
def blog(content_root):
    write_post(content_root, "python-tips", post_text("Python Tips", date="2024-06-01", tags=["Python", "tips"]))
    write_post(
        content_root,
        "team-life",
        post_text("Team Life", date="2024-05-01", tags=["community"], excerpt="Working with others", body="We ship with REACT."),
    )
    return BlogCollection(content_root / "blog" / "posts")


def _slugs(posts):
    return [p.slug for p in posts]


def test_blank_query_returns_full_listing(blog):
    listing = _slugs(blog.list_all())
    assert _slugs(blog.search("")) == listing
    assert _slugs(blog.search("   ")) == listing


@pytest.mark.parametrize("query", ["python", "Tips", "react", "others", "intro", "zzz-no-match"])
def test_search_ignores_case(blog, query):
    assert _slugs(blog.search(query)) == _slugs(blog.search(query.upper()))


def test_matches_title_excerpt_body_and_tags(blog):
    assert _slugs(blog.search("python tips")) == ["python-tips"]
    assert _slugs(blog.search("working with")) == ["team-life"]
    assert _slugs(blog.search("ship with react")) == ["team-life"]
    assert _slugs(blog.search("intro")) == ["hello-world"]


def test_results_keep_listing_order(blog):
    results = _slugs(blog.search("e"))
    listing = _slugs(blog.list_all())
    assert results == [s for s in listing if s in results]


def test_no_match_returns_empty(blog):
    assert blog.search("kubernetes") == []


def test_top_tags_counts_and_limits(content_root):
    write_post(content_root, "a", post_text("A", date="2024-01-01", tags=["x", "y"]))
    write_post(content_root, "b", post_text("B", date="2024-01-02", tags=["x"]))
    blog = BlogCollection(content_root / "blog" / "posts")

    top = blog.top_tags(2)

    assert top[0] == {"tag": "x", "count": 2}
    assert len(top) == 2
