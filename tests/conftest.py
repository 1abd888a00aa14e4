from __future__ import annotations

import os
from pathlib import Path

import pytest

# IMPORTANT: this runs at import time (before nanushi.config.paths is imported by tests)
BASE = Path(os.getenv("PYTEST_TMP_BASE", "/tmp")) / "nanushi_pytest"
STATE = BASE / "state"
STATE.mkdir(parents=True, exist_ok=True)

os.environ.setdefault("NANUSHI_ENV", "test")

# Force db to writable location for tests (bypasses /var/lib defaults)
os.environ["NANUSHI_STATE_DIR"] = str(STATE)
os.environ["NANUSHI_DB_URL"] = f"sqlite:///{(STATE / 'nanushi.db').as_posix()}"

# Never talk to the real email provider
os.environ.pop("NANUSHI_RESEND_API_KEY", None)

from tests._harness import (  # noqa: E402
    FakeMailer,
    FakeStore,
    build_app_factory,
    make_content_root,
    make_sql_store,
    sample_mission,
)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    return make_content_root(tmp_path / "content")


@pytest.fixture
def mission():
    return sample_mission()


@pytest.fixture
def store(mission) -> FakeStore:
    return FakeStore(missions=[mission])


@pytest.fixture
def sql_store(tmp_path: Path, mission):
    s = make_sql_store(tmp_path / "store.db")
    s.upsert_mission(mission)
    return s


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def build_app(content_root: Path):
    """
    Fixture returns a callable:
        app = build_app(store=FakeStore(...), mailer=FakeMailer())
    """
    return build_app_factory(content_root)
