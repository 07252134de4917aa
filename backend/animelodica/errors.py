"""JSON error rendering and exception handlers.

Every error response shares one envelope:

    {"errors": {"detail": "Not Found"}}

except validation failures, which are keyed by field:

    {"errors": {"password": ["should be at least 12 character(s)"]}}
"""

import logging
from http import HTTPStatus

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from animelodica.changeset import InvalidChangesetError
from animelodica.services.repositories import NotFoundError

logger = logging.getLogger(__name__)


def status_message(status_code: int) -> str:
    """Reason phrase for a status code, e.g. 404 -> "Not Found"."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown Error"


def render_error(template: str) -> dict:
    """Render the error body for a template name such as ``"404.json"``."""
    code = template.split(".", 1)[0]
    return {"errors": {"detail": status_message(int(code))}}


def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP exceptions, keeping headers such as Location."""
    detail = exc.detail if exc.detail else status_message(exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content={"errors": {"detail": detail}},
        headers=getattr(exc, "headers", None),
    )


def changeset_error_handler(_request: Request, exc: InvalidChangesetError) -> JSONResponse:
    """Render an invalid changeset as field-keyed messages."""
    return JSONResponse(
        status_code=422,
        content={"errors": exc.errors},
    )


def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request body validation errors in the same field-keyed shape."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = [str(part) for part in error["loc"] if part != "body"]
        field = ".".join(loc) if loc else "body"
        errors.setdefault(field, []).append(error["msg"])

    return JSONResponse(
        status_code=422,
        content={"errors": errors},
    )


def not_found_error_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
    logger.debug(f"{exc}")
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=render_error("404.json"),
    )


def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions. Never exposes internals."""
    logger.exception(f"Unhandled exception on {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=render_error("500.json"),
    )
