from __future__ import annotations

from typing import Any

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

ERR_INTERNAL = "Internal server error"


class SiteError(Exception):
    """
    Base typed error for the site backend.

    `code` is stable for clients, `message` is safe to show to end users.
    Upstream detail never goes in `message`.
    """

    code = "internal_error"
    status_code = 500
    default_message = ERR_INTERNAL

    def __init__(self, message: str | None = None, *, code: str | None = None, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = int(status_code)
        super().__init__(self.message)

    def to_public_dict(self) -> dict[str, Any]:
        return {"success": False, "message": self.message, "code": self.code}


class NotFoundError(SiteError):
    code = "not_found"
    status_code = 404
    default_message = "Not found"


class MissionNotFoundError(NotFoundError):
    code = "MISSION_NOT_FOUND"
    default_message = "Mission not found"


class DuplicateError(SiteError):
    code = "duplicate"
    status_code = 409
    default_message = "Already exists"


class DuplicateApplicationError(DuplicateError):
    code = "DUPLICATE_APPLICATION"
    status_code = 400
    default_message = "You have already submitted an application for this mission with this email address"


class AlreadyOnWaitlistError(DuplicateError):
    code = "ALREADY_ON_WAITLIST"
    default_message = "This email is already on our waitlist!"


class UpstreamError(SiteError):
    """A data-store or email-provider fault. Detail is logged, not returned."""

    code = "internal_error"


class RecordValidationError(UpstreamError):
    """A row from the store did not match the expected shape."""

    code = "internal_error"


class MailError(Exception):
    """Raised by a mailer when a send attempt fails."""


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(SiteError)
    async def _site_error_handler(request: Request, exc: SiteError) -> Response:
        if exc.status_code >= 500:
            logger.warning("request failed", path=request.url.path, code=exc.code)
        return JSONResponse(status_code=exc.status_code, content=exc.to_public_dict())

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        payload = {"success": False, "message": str(exc.detail), "code": f"http.{exc.status_code}"}
        return JSONResponse(status_code=int(exc.status_code), content=payload, headers=dict(exc.headers or {}))

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
        payload = {
            "success": False,
            "message": "Invalid request",
            "code": "validation_error",
            "errors": jsonable_errors(exc),
        }
        return JSONResponse(status_code=422, content=payload)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        logger.opt(exception=exc).error("unhandled exception", path=request.url.path)
        return JSONResponse(status_code=500, content={"success": False, "message": ERR_INTERNAL, "code": "internal_error"})


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    # pydantic error dicts may carry exception objects under "ctx"
    out: list[dict[str, Any]] = []
    for err in exc.errors():
        out.append({"loc": list(err.get("loc", ())), "msg": str(err.get("msg", "")), "type": str(err.get("type", ""))})
    return out
