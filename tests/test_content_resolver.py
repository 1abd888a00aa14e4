"""Slug resolution for blog posts and tutorial chapters."""

from pathlib import Path

import pytest

from nanushi.content import BlogCollection, BlogPost, TutorialSeries, default_tutorials
from nanushi.content.parser import ContentParseError, dump_document, parse_document
from tests._harness import post_text, write_post


def _blog(root: Path) -> BlogCollection:
    return BlogCollection(root / "blog" / "posts")


def test_hello_world_resolves_with_header_fields(content_root):
    result = _blog(content_root).resolve("hello-world")

    assert result.status == "found"
    post = result.item
    assert post.title == "Hello"
    assert post.excerpt == "A first post"
    assert post.date == "2024-03-01"
    assert "intro" in post.tags
    assert post.body.startswith("# Hello")


def test_missing_post_is_not_found(content_root):
    result = _blog(content_root).resolve("missing-post")
    assert result.status == "not_found"
    assert result.item is None


@pytest.mark.parametrize("slug", ["", "../hello-world", "hello/world", ".hidden", "hello-world.md"])
def test_unsafe_or_odd_slugs_are_not_found(content_root, slug):
    assert _blog(content_root).resolve(slug).status == "not_found"


def test_missing_posts_directory_lists_nothing(tmp_path):
    blog = BlogCollection(tmp_path / "nope")
    assert blog.list_all() == []
    assert blog.resolve("anything").status == "not_found"


def test_malformed_front_matter_returns_placeholder(content_root):
    write_post(content_root, "broken", "---\ntitle: [unclosed\n---\nbody\n")

    result = _blog(content_root).resolve("broken")

    assert result.status == "error"
    assert result.item is not None
    assert result.item.title == "Error"
    assert "Failed to load" in result.item.body
    assert result.error


def test_front_matter_without_title_is_an_error(content_root):
    write_post(content_root, "untitled", "---\nexcerpt: no title here\n---\nbody\n")
    assert _blog(content_root).resolve("untitled").status == "error"


def test_front_matter_round_trip(content_root):
    original = BlogPost(
        slug="round-trip",
        title="Round Trip",
        excerpt="there and back",
        date="2024-05-05",
        tags=["a", "b"],
        body="Some *markdown* body.\n\n- one\n- two",
    )
    write_post(content_root, "round-trip", dump_document(original))

    parsed = _blog(content_root).resolve("round-trip").item

    assert parsed.title == original.title
    assert parsed.excerpt == original.excerpt
    assert parsed.date == original.date
    assert parsed.tags == original.tags
    assert parsed.body == original.body


def test_yaml_dates_are_normalized_to_iso_strings():
    post = parse_document("---\ntitle: T\ndate: 2024-01-15\n---\nx", slug="t", model=BlogPost)
    assert post.date == "2024-01-15"


def test_numeric_title_and_tags_are_coerced_to_strings(content_root):
    write_post(content_root, "year-in-review", "---\ntitle: 2024\ndate: '2024-12-31'\ntags: [react, 2024]\n---\nRecap.\n")

    result = _blog(content_root).resolve("year-in-review")

    assert result.found
    assert result.item.title == "2024"
    assert result.item.tags == ["react", "2024"]
    assert "year-in-review" in [p.slug for p in _blog(content_root).list_all()]


def test_offset_dates_sort_by_instant(content_root):
    # 01:00 UTC on the 2nd is earlier than 23:00 -05:00 on the 1st (04:00 UTC)
    write_post(content_root, "utc", post_text("Utc", date="2024-01-02T01:00:00Z"))
    write_post(content_root, "eastern", post_text("Eastern", date="2024-01-01T23:00:00-05:00"))

    slugs = [p.slug for p in _blog(content_root).list_all()]

    assert slugs == ["hello-world", "eastern", "utc"]


def test_parse_document_rejects_bad_yaml():
    with pytest.raises(ContentParseError):
        parse_document("---\n: : :\n  - [\n---\nbody", slug="bad", model=BlogPost)


def test_read_time_rounds_up():
    post = BlogPost(slug="s", title="t", body="word " * 201)
    assert post.read_time == "2 min read"
    assert BlogPost(slug="s", title="t", body="").read_time == "1 min read"


def test_list_all_is_newest_first_and_skips_broken(content_root):
    write_post(content_root, "older", post_text("Older", date="2023-01-01"))
    write_post(content_root, "newer", post_text("Newer", date="2025-01-01"))
    write_post(content_root, "broken", "---\ntitle: [\n---\n")

    slugs = [p.slug for p in _blog(content_root).list_all()]

    assert slugs == ["newer", "hello-world", "older"]


def test_each_call_rereads_the_file(content_root):
    blog = _blog(content_root)
    assert blog.resolve("hello-world").item.title == "Hello"

    write_post(content_root, "hello-world", post_text("Changed", date="2024-03-01"))

    assert blog.resolve("hello-world").item.title == "Changed"


def test_tutorial_chapter_resolves_through_table(content_root):
    series = default_tutorials(content_root)["react-native-fundamentals"]

    result = series.resolve("introduction")

    assert result.found
    assert result.item.title == "Introduction"
    assert result.item.description == "Start here"
    assert result.item.chapter == 1


def test_tutorial_slug_outside_table_is_not_found(content_root):
    series = default_tutorials(content_root)["react-native-fundamentals"]
    assert series.resolve("01-introduction").status == "not_found"
    assert series.resolve("nonexistent").status == "not_found"


def test_tutorial_mapped_but_missing_file_is_placeholder(content_root):
    series = default_tutorials(content_root)["react-native-fundamentals"]

    result = series.resolve("setup")

    assert result.status == "error"
    assert result.item.title == "Error"
    assert result.item.chapter == 0


def test_table_of_contents_marks_missing_chapters(content_root):
    series = TutorialSeries(
        key="demo",
        title="Demo",
        chapters_dir=content_root / "tutorials" / "react-native-fundamentals" / "chapters",
        chapter_files={"introduction": "01-introduction.md", "later": "99-later.md"},
    )

    toc = series.table_of_contents()

    assert toc[0] == {"slug": "introduction", "title": "Introduction", "chapter": 1, "available": True}
    assert toc[1]["available"] is False
