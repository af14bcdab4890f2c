"""
Exception handlers: every failure reaches the UI as a notification.
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pocketnotes.core.errors import NoActiveSessionError, NoteNotFoundError
from pocketnotes.notifications import Severity, notify


def _body(message: str, severity: Severity, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "message": message,
        "notification": notify(message, severity).model_dump(mode="json"),
    }
    body.update(extra)
    return body


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("pocketnotes.errors")

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        severity = Severity.ERROR if exc.status_code >= 500 else Severity.WARNING
        return JSONResponse(status_code=exc.status_code, content=_body(str(exc.detail or "HTTP error"), severity))

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        # only an emptied title/content gets the form hint
        empty_field = any(
            (e.get("loc") or ("",))[0] == "body" and e.get("type") == "string_too_short"
            for e in errors
        )
        return JSONResponse(
            status_code=422,
            content=_body(
                "Please fill in both title and content." if empty_field else "Invalid request.",
                Severity.WARNING,
                errors=[{"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in errors],
            ),
        )

    @app.exception_handler(NoActiveSessionError)
    async def _no_session_handler(request: Request, exc: NoActiveSessionError):
        return JSONResponse(status_code=401, content=_body("Please log in first.", Severity.WARNING))

    @app.exception_handler(NoteNotFoundError)
    async def _note_not_found_handler(request: Request, exc: NoteNotFoundError):
        return JSONResponse(status_code=404, content=_body("Failed to load note for editing.", Severity.ERROR))

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        log.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=_body("Something went wrong. Please try again.", Severity.ERROR))
