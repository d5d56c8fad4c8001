"""Exception handlers.

Every error response has the shape:
    {"error": "<human readable message>", "code": "JTTS_E...", "request_id": "..."}

- TTSBaseException subclasses map to their own status and message
- RequestValidationError (malformed JSON / wrong types) maps to 400
- Anything else is logged with its traceback and returned as a safe 500
"""

import traceback
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jtts.api.exceptions import TTSBaseException
from jtts.config import get_settings
from jtts.utils.logging import get_log_context, get_logger

logger = get_logger("api")


def _get_request_id(request: Request) -> str | None:
    # The catch-all handler runs outside the request middleware, after its
    # log context is gone; request.state still carries the id.
    return getattr(request.state, "request_id", None) or get_log_context().get("request_id")


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    extra: dict[str, Any] | None = None,
) -> JSONResponse:
    request_id = _get_request_id(request)
    body: dict[str, Any] = {"error": message, "code": code}
    if extra:
        body.update(extra)
    headers: dict[str, str] = {}
    if request_id:
        body["request_id"] = request_id
        headers["X-Request-ID"] = request_id
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def tts_exception_handler(request: Request, exc: TTSBaseException) -> JSONResponse:
    """Handle TTSBaseException and subclasses."""
    log_fn = logger.error if exc.http_status >= 500 else logger.warning
    log_fn(
        "Request rejected",
        error_code=exc.error_code,
        error_message=exc.message,
        http_status=exc.http_status,
        details=exc.details,
        path=request.url.path,
    )
    return _error_response(request, exc.http_status, exc.error_code, exc.message)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle body parsing/type errors as 400 with a readable message."""
    errors: list[dict[str, Any]] = []
    for error in exc.errors():
        field_parts = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({
            "field": ".".join(field_parts) if field_parts else "body",
            "message": error.get("msg", "Invalid value"),
        })

    logger.warning(
        "Validation error",
        path=request.url.path,
        fields=[e["field"] for e in errors],
    )

    if len(errors) == 1:
        message = f"Invalid request: {errors[0]['message']} (field: {errors[0]['field']})"
    else:
        message = f"Invalid request: {len(errors)} errors"

    return _error_response(request, 400, "JTTS_E100", message, {"fields": errors})


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle routing errors (404, 405) in the common error shape."""
    logger.warning(
        "HTTP exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
    )
    code = "JTTS_E100" if exc.status_code < 500 else "JTTS_E000"
    message = str(exc.detail) if exc.detail else "An error occurred"
    return _error_response(request, exc.status_code, code, message)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking internals."""
    logger.exception(
        "Unhandled exception",
        error_type=type(exc).__name__,
        error=str(exc),
        path=request.url.path,
        method=request.method,
    )

    if get_settings().app.debug:
        return _error_response(
            request,
            500,
            "JTTS_E000",
            str(exc),
            {"type": type(exc).__name__, "traceback": traceback.format_exc().split("\n")},
        )

    return _error_response(request, 500, "JTTS_E000", "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(TTSBaseException, tts_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
