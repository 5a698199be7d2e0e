"""HTTP layer for coldcheck.

Routers live in the submodules; this module holds the error envelope and
the exception handlers that turn core errors into HTTP responses.
"""

from typing import Any

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..errors import (
    ColdCheckError,
    ConstraintViolation,
    NotFoundError,
    PartialRangeFailure,
    ValidationError,
)
from ..logging import get_logger

logger = get_logger(__name__)


class ErrorDetail(BaseModel):
    """One problem with a request, optionally tied to a field."""

    code: str
    message: str
    field: str | None = None
    details: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Body of every error response."""

    success: bool = False
    error: str
    error_code: str
    details: list[ErrorDetail] | None = None


class APIError(HTTPException):
    """HTTP error carrying an error code and optional details."""

    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        details: list[ErrorDetail] | None = None,
    ):
        self.error_code = error_code
        self.message = message
        self.details = details
        super().__init__(status_code=status_code, detail=message)


class AuthenticationError(APIError):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(401, "AUTHENTICATION_REQUIRED", message)


# Core error -> (status code, error code); first match wins
_DOMAIN_ERRORS: list[tuple[type[ColdCheckError], int, str]] = [
    (ValidationError, 422, "VALIDATION_ERROR"),
    (NotFoundError, 404, "NOT_FOUND"),
    (ConstraintViolation, 409, "CONSTRAINT_VIOLATION"),
    (PartialRangeFailure, 503, "PARTIAL_RANGE_FAILURE"),
]


def _details_for(exc: ColdCheckError, error_code: str) -> list[ErrorDetail] | None:
    if isinstance(exc, ValidationError) and exc.field:
        return [ErrorDetail(code=error_code, message=exc.message, field=exc.field)]
    if isinstance(exc, PartialRangeFailure):
        return [
            ErrorDetail(
                code=error_code,
                message=failure.error,
                field="report_date",
                details={"report_date": failure.report_date.isoformat()},
            )
            for failure in exc.result.failed_dates
        ]
    return None


def to_api_error(exc: ColdCheckError) -> APIError:
    """Translate a core error into an APIError."""
    for error_cls, status_code, error_code in _DOMAIN_ERRORS:
        if isinstance(exc, error_cls):
            return APIError(status_code, error_code, exc.message, _details_for(exc, error_code))
    return APIError(500, "INTERNAL_ERROR", exc.message)


def _error_response(
    status_code: int,
    error_code: str,
    message: str,
    details: list[ErrorDetail] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message, error_code=error_code, details=details).model_dump(),
        headers={"X-Error-Code": error_code},
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return _error_response(exc.status_code, exc.error_code, exc.message, exc.details)


async def domain_error_handler(request: Request, exc: ColdCheckError) -> JSONResponse:
    api_error = to_api_error(exc)
    if api_error.status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")
    return await api_error_handler(request, api_error)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies and parameters in the common error shape."""
    details = [
        ErrorDetail(
            code="VALIDATION_ERROR",
            message=error.get("msg", "Invalid value"),
            field=".".join(str(part) for part in error.get("loc", ())[1:]) or None,
        )
        for error in exc.errors()
    ]
    return _error_response(422, "VALIDATION_ERROR", "Request validation failed", details)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _error_response(exc.status_code, "HTTP_ERROR", str(exc.detail))


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled exception: {exc}")
    return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")


def register_exception_handlers(app) -> None:
    """Register the error handlers on a FastAPI app."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(ColdCheckError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
