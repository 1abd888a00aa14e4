from __future__ import annotations

import re
from typing import Optional

import markdown

_H1_RE = re.compile(r"^#\s+(.*?)\s*#*\s*$")
_FENCE_RE = re.compile(r"^\s*(```|~~~)")

EXTENSIONS = ["fenced_code", "tables", "sane_lists"]


def drop_title_heading(body: str, title: str) -> str:
    """Remove level-1 headings that repeat the page title (outside code fences)."""
    wanted = title.strip().lower()
    if not wanted:
        return body

    out: list[str] = []
    in_fence = False
    for line in body.splitlines():
        if _FENCE_RE.match(line):
            in_fence = not in_fence
        elif not in_fence:
            m = _H1_RE.match(line)
            if m and m.group(1).strip().lower() == wanted:
                continue
        out.append(line)
    return "\n".join(out)


def render_markdown(body: str, *, title: Optional[str] = None) -> str:
    text = drop_title_heading(body, title) if title else body
    return markdown.markdown(text, extensions=EXTENSIONS, output_format="html")
