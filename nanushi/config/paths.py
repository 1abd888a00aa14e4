from __future__ import annotations

import os
from pathlib import Path


def _env_path(name: str, default: str) -> Path:
    return Path(os.getenv(name, default)).resolve()


STATE_DIR: Path = _env_path("NANUSHI_STATE_DIR", "/var/lib/nanushi/state")
CONTENT_ROOT: Path = _env_path("NANUSHI_CONTENT_ROOT", "content")


def blog_posts_dir(content_root: Path | None = None) -> Path:
    return (content_root or CONTENT_ROOT) / "blog" / "posts"


def tutorial_chapters_dir(series: str, content_root: Path | None = None) -> Path:
    return (content_root or CONTENT_ROOT) / "tutorials" / series / "chapters"
