# This file defines the API error taxonomy and the handlers that render it.
# Every failure reaches the client as `{error, message, details, request_id, timestamp}`.
# Validation problems are reported per field; unexpected failures are logged and replaced by a generic message.

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Domain error type with structured API details."""

    def __init__(
        self,
        *,
        status_code: int,
        error_code: str,
        message: str,
        details: Any | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(APIError):
    """Missing or malformed input; `field_errors` maps field name to message."""

    def __init__(self, field_errors: dict[str, str], *, message: str = "Validation failed.") -> None:
        super().__init__(
            status_code=400,
            error_code="VALIDATION_ERROR",
            message=message,
            details=field_errors,
        )
        self.field_errors = field_errors


class NotFoundError(APIError):
    def __init__(self, message: str, *, error_code: str = "NOT_FOUND") -> None:
        super().__init__(status_code=404, error_code=error_code, message=message)


class NotConfiguredError(APIError):
    """A backing service (datastore, payments, email) is absent; clients may retry later."""

    def __init__(self, message: str, *, error_code: str = "NOT_CONFIGURED") -> None:
        super().__init__(status_code=503, error_code=error_code, message=message)


class UpstreamError(APIError):
    """An external collaborator failed. 400 when the caller can fix the request, else 500."""

    def __init__(
        self,
        message: str,
        *,
        error_code: str = "UPSTREAM_ERROR",
        caller_correctable: bool = False,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            status_code=400 if caller_correctable else 500,
            error_code=error_code,
            message=message,
            details=details,
        )


def _request_id(request: Request) -> str:
    return str(getattr(request.state, "request_id", "unknown"))


def _error_body(
    *, request: Request, error_code: str, message: str, details: Any | None = None
) -> dict[str, Any]:
    return {
        "error": error_code,
        "message": message,
        "details": details,
        "request_id": _request_id(request),
        "timestamp": datetime.now(tz=UTC).isoformat(),
    }


def _field_errors(exc: RequestValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for item in exc.errors():
        location = [str(part) for part in item.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "request"
        errors.setdefault(field, str(item.get("msg", "Invalid value")))
    return errors


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.warning("%s on %s: %s", exc.error_code, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                request=request,
                error_code=exc.error_code,
                message=exc.message,
                details=exc.details,
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=_error_body(
                request=request,
                error_code="VALIDATION_ERROR",
                message="Invalid request parameters.",
                details=_field_errors(exc),
            ),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                request=request,
                error_code="HTTP_ERROR",
                message=str(exc.detail),
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request=request,
                error_code="INTERNAL_SERVER_ERROR",
                message="The server encountered an unexpected error.",
            ),
        )
