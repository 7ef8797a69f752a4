"""Exception handlers mapping analytics errors to HTTP responses."""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from nutrition_analytics.domain.errors import (
    AnalyticsError,
    InvalidPeriod,
    PeriodLengthMismatch,
    UnsupportedMetric,
)

_logger = logging.getLogger(__name__)

_STATUS_CODES: dict[type[AnalyticsError], HTTPStatus] = {
    InvalidPeriod: HTTPStatus.BAD_REQUEST,
    UnsupportedMetric: HTTPStatus.BAD_REQUEST,
    PeriodLengthMismatch: HTTPStatus.UNPROCESSABLE_ENTITY,
}


def error_response(message: str, status_code: int) -> JSONResponse:
    """Build the standard error body."""
    code = int(status_code)
    return JSONResponse(
        status_code=code,
        content={"error": {"message": message, "status_code": code}},
    )


async def analytics_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Translate an analytics error into a JSON error response."""
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    message = str(exc)
    if isinstance(exc, AnalyticsError):
        message = exc.message
        status_code = _STATUS_CODES.get(type(exc), status_code)
    _logger.warning(
        "Analytics error: %s [%s %s]", message, request.method, request.url.path
    )
    return error_response(message, status_code)


def register_error_handlers(app: FastAPI) -> None:
    """Install the analytics error handlers on an app."""
    app.add_exception_handler(AnalyticsError, analytics_error_handler)
