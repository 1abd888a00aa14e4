import importlib


def test_paths_env_override(tmp_path, monkeypatch):
    st = tmp_path / "state"
    content = tmp_path / "content"

    monkeypatch.setenv("NANUSHI_STATE_DIR", str(st))
    monkeypatch.setenv("NANUSHI_CONTENT_ROOT", str(content))

    import nanushi.config.paths as paths
    importlib.reload(paths)

    assert paths.STATE_DIR == st.resolve()
    assert paths.blog_posts_dir() == content.resolve() / "blog" / "posts"
    assert paths.tutorial_chapters_dir("demo") == content.resolve() / "tutorials" / "demo" / "chapters"


def test_db_url_falls_back_to_sqlite_under_state_dir(tmp_path, monkeypatch):
    monkeypatch.delenv("NANUSHI_DB_URL", raising=False)
    monkeypatch.setenv("NANUSHI_STATE_DIR", str(tmp_path))

    from nanushi.config import Settings

    s = Settings()

    assert s.resolved_db_url() == f"sqlite:///{(tmp_path / 'nanushi.sqlite3').as_posix()}"


def test_explicit_db_url_wins(monkeypatch):
    monkeypatch.setenv("NANUSHI_DB_URL", "postgresql://u:p@db:5432/site")

    from nanushi.config import Settings

    assert Settings().resolved_db_url() == "postgresql://u:p@db:5432/site"
