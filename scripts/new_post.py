#!/usr/bin/env python3
from __future__ import annotations

import argparse
import re
from datetime import date

from nanushi.config.paths import blog_posts_dir
from nanushi.content.models import BlogPost
from nanushi.content.parser import dump_document


def slugify(title: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a blog post skeleton.")
    parser.add_argument("title")
    parser.add_argument("--excerpt", default="")
    parser.add_argument("--tags", default="", help="comma separated")
    args = parser.parse_args()

    slug = slugify(args.title)
    if not slug:
        raise SystemExit("title must contain at least one letter or digit")

    post = BlogPost(
        slug=slug,
        title=args.title,
        excerpt=args.excerpt,
        date=date.today().isoformat(),
        tags=[t.strip() for t in args.tags.split(",") if t.strip()],
        body=f"Write about {args.title} here.",
    )

    target = blog_posts_dir() / f"{slug}.md"
    if target.exists():
        raise SystemExit(f"refusing to overwrite {target}")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(dump_document(post) + "\n", encoding="utf-8")
    print(f"ok created {target}")


if __name__ == "__main__":
    main()
