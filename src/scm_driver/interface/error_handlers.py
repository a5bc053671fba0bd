"""Global exception handlers — translate driver errors to HTTP responses.

Each error kind maps to a specific HTTP status code and the standard
``{"status": "error", "message": "..."}`` envelope.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from scm_driver.domain.exceptions import ErrorKind, RateLimitedError, ScmError

logger = logging.getLogger(__name__)

_KIND_STATUS: dict[ErrorKind, int] = {
    ErrorKind.AUTH: 401,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.TRANSPORT: 502,
    ErrorKind.DECODE: 502,
    ErrorKind.UNSUPPORTED: 501,
    ErrorKind.INVALID_INPUT: 422,
    ErrorKind.CONFIGURATION: 500,
}


def _error_json(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Driver exceptions ───────────────────────────────────────────────

    @app.exception_handler(ScmError)
    async def scm_error_handler(request: Request, exc: ScmError) -> JSONResponse:
        status_code = _KIND_STATUS.get(exc.kind, 500)
        logger.warning("%s (%s): %s", type(exc).__name__, exc.kind.value, exc)
        headers = None
        if isinstance(exc, RateLimitedError) and exc.retry_after is not None:
            headers = {"Retry-After": str(exc.retry_after)}
        return _error_json(status_code, str(exc), headers)

    # ── Explicit HTTP errors (e.g. absent commit / tree) ────────────────

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_json(exc.status_code, str(exc.detail))

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = " → ".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(422, "; ".join(messages))

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")
