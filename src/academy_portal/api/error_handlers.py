"""
academy_portal.api.error_handlers

Global exception handlers.

Responsibilities:
- PortalError -> its own status with `{"error": <user-safe message>}`.
- HTTPException (incl. unknown routes) -> its status with `{"error": <detail>}`.
- RequestValidationError -> 400 with field-level details.
- Any other exception -> 500 `{"error": "Internal server error"}`; detail goes to logs only.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from academy_portal.errors import PortalError
from academy_portal.observability.logging import get_logger

log = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
        emit = log.warning if exc.http_status < 500 else log.error
        emit(
            "portal_error",
            error_type=type(exc).__name__,
            detail=exc.detail,
            http_status=exc.http_status,
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        log.warning("request_validation_failed", errors=len(exc.errors()))
        return JSONResponse(
            status_code=HTTP_400_BAD_REQUEST,
            content={
                "error": "Invalid request data",
                "details": [
                    {
                        "field": ".".join(str(loc) for loc in e["loc"]),
                        "message": e["msg"],
                    }
                    for e in exc.errors()
                ],
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        log.error("unhandled_error", error_type=type(exc).__name__, exc_info=exc)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
