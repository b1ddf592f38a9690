from http import HTTPStatus

import sentry_sdk
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pinmap.core import exceptions as domain_exceptions
from pinmap.logging import get_logger

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred"


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})


def _http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return _error(404, "NotFound", "Route not found")
    try:
        kind = HTTPStatus(exc.status_code).phrase.replace(" ", "").replace("-", "")
    except ValueError:
        kind = "HTTPError"
    return _error(exc.status_code, kind, str(exc.detail))


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    # Drop the "body"/"query" prefix so the message names the field itself
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query")]
    msg = str(first.get("msg", "Invalid value"))
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def _validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(400, "ValidationError", _first_validation_message(exc))


def _domain_validation_handler(_: Request, exc: domain_exceptions.ValidationError) -> JSONResponse:
    return _error(400, "ValidationError", str(exc) or "Bad Request")


def _conflict_handler(_: Request, exc: domain_exceptions.ConflictError) -> JSONResponse:
    return _error(409, "Conflict", str(exc) or "Conflict")


def _report_internal(request: Request, exc: Exception) -> JSONResponse:
    get_logger(__name__).error(
        "internal_error",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    sentry_sdk.capture_exception(exc)
    # Hide internal details from clients
    return _error(500, "InternalServerError", INTERNAL_ERROR_MESSAGE)


def _internal_error_handler(request: Request, exc: domain_exceptions.InternalError) -> JSONResponse:
    return _report_internal(request, exc)


def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return _report_internal(request, exc)


def install(app) -> None:
    # Register centralized exception handlers
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(domain_exceptions.ValidationError, _domain_validation_handler)
    app.add_exception_handler(domain_exceptions.ConflictError, _conflict_handler)
    app.add_exception_handler(domain_exceptions.InternalError, _internal_error_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
