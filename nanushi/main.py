from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from fastapi import FastAPI, HTTPException, Request
from loguru import logger
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy.engine import Engine
from starlette.responses import Response

from nanushi import __version__
from nanushi.config import Settings, get_settings
from nanushi.config.paths import blog_posts_dir
from nanushi.content import BlogCollection, TutorialSeries, default_tutorials
from nanushi.db import init_db, make_engine, make_session_factory
from nanushi.errors import register_exception_handlers
from nanushi.logging_config import configure_logging
from nanushi.mail import EmailTemplates, Mailer, ResendMailer
from nanushi.routes.content import router as content_router
from nanushi.routes.missions import router as missions_router
from nanushi.routes.signup import router as signup_router
from nanushi.store import MissionStore, SqlMissionStore


def _sanitize_db_url(db_url: str) -> str:
    try:
        u = urlparse(db_url)
        scheme = (u.scheme or "db").split("+", 1)[0]
        host = u.hostname or ""
        port = f":{u.port}" if u.port else ""
        dbname = (u.path or "").lstrip("/")
        if host or dbname:
            return f"{scheme}://{host}{port}/{dbname}"
        return f"{scheme}://(unresolved)"
    except ValueError:
        return "db_url:unparseable"


def build_app(
    settings: Optional[Settings] = None,
    *,
    store: Optional[MissionStore] = None,
    mailer: Optional[Mailer] = None,
    content_root: Optional[Path] = None,
    tutorials: Optional[dict[str, TutorialSeries]] = None,
) -> FastAPI:
    """
    Build the site API.

    Store and mailer are injected when given (tests pass fakes); otherwise a
    SQLAlchemy store and a Resend mailer are constructed from settings.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    engine: Optional[Engine] = None
    if store is None:
        engine = make_engine(settings.resolved_db_url())
        store = SqlMissionStore(make_session_factory(engine))
    if mailer is None:
        mailer = ResendMailer(
            settings.resend_api_key,
            api_url=settings.resend_api_url,
            timeout=settings.resend_timeout_seconds,
        )
    root = Path(content_root or settings.content_root)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if engine is not None:
            try:
                init_db(engine)
                app.state.db_init_ok = True
                app.state.db_init_error = None
            except Exception as e:
                app.state.db_init_ok = False
                app.state.db_init_error = type(e).__name__
                logger.exception("DB init failed")
        yield
        if engine is not None:
            engine.dispose()

    app = FastAPI(title="nanushi-site", version=__version__, lifespan=lifespan)

    # Freeze state at build time
    app.state.settings = settings
    app.state.service = settings.service
    app.state.env = settings.env
    app.state.app_instance_id = str(uuid.uuid4())
    app.state.db_init_ok = engine is None
    app.state.db_init_error = None
    app.state.store = store
    app.state.mailer = mailer
    app.state.templates = EmailTemplates(
        mail_from=settings.mail_from,
        welcome_from=settings.welcome_from,
        site_url=settings.site_url,
    )
    app.state.blog = BlogCollection(blog_posts_dir(root))
    app.state.tutorials = tutorials if tutorials is not None else default_tutorials(root)

    register_exception_handlers(app)

    app.include_router(content_router)
    app.include_router(missions_router)
    app.include_router(signup_router)

    @app.get("/health", tags=["Health"])
    async def health(request: Request) -> dict:
        return {
            "status": "ok",
            "service": request.app.state.service,
            "env": request.app.state.env,
            "app_instance_id": request.app.state.app_instance_id,
        }

    @app.get("/health/live", tags=["Health"])
    async def health_live() -> dict:
        return {"status": "live"}

    @app.get("/health/ready", tags=["Health"])
    async def health_ready() -> dict:
        if not bool(app.state.db_init_ok):
            raise HTTPException(status_code=503, detail=f"db_init_failed: {app.state.db_init_error or 'unknown'}")
        result: dict = {"status": "ready", "content_root": str(root)}
        if engine is not None:
            result["db"] = _sanitize_db_url(settings.resolved_db_url())
        return result

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


app = build_app()
