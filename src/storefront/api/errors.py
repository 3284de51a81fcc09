"""Translate domain errors into JSON error responses.

Every error body carries a machine-readable ``error`` reason and a
human-readable ``message``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.exceptions import StorefrontError

logger = structlog.get_logger(__name__)

_REASON_BY_STATUS = {401: "unauthorized", 403: "forbidden", 404: "not_found", 405: "method_not_allowed"}


def _error(status_code: int, reason: str, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": reason, "message": message, **extra})


async def _on_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return _error(400, "invalid_input", "Invalid input", messages=exc.messages)


async def _on_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path", "header"))
        messages.setdefault(field or "request", []).append(error["msg"])
    return _error(400, "invalid_input", "Invalid input", messages=messages)


async def _on_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    messages = getattr(exc, "messages", None)
    message = messages if isinstance(messages, str) else "Not found"
    return _error(404, "not_found", message)


async def _on_storefront_error(request: Request, exc: StorefrontError) -> JSONResponse:
    return _error(exc.status_code, exc.reason, exc.message)


async def _on_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    reason = _REASON_BY_STATUS.get(exc.status_code, "http_error")
    return _error(exc.status_code, reason, str(exc.detail))


async def _on_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error while processing request",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return _error(500, "persistence_failure", "Something went wrong, please try again later")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _on_validation_error)
    app.add_exception_handler(RequestValidationError, _on_request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, _on_not_found)
    app.add_exception_handler(StorefrontError, _on_storefront_error)
    app.add_exception_handler(StarletteHTTPException, _on_http_exception)
    app.add_exception_handler(Exception, _on_unexpected_error)
