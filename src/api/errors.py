"""
Exception handlers - Map domain errors to structured JSON responses.

Every failure leaves the API as {"error": "<message>"} with a stable
status code. Unexpected exceptions are logged with their traceback and
answered with a generic 500; their details never reach the caller.

The catch-all runs as HTTP middleware rather than an Exception handler.
Starlette routes Exception handlers to ServerErrorMiddleware, which sits
outside every user middleware, so its 500s would skip CORS headers.
register_exception_handlers must therefore run before CORSMiddleware is
added.
"""

import logging

from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.domain.exceptions import CredentialError, InternalError

logger = logging.getLogger(__name__)


async def credential_error_handler(request: Request, exc: CredentialError) -> JSONResponse:
    if isinstance(exc, InternalError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.__cause__ or exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies are client errors, reported like missing fields."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body"},
    )


async def catch_unhandled_errors(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Server error"},
        )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CredentialError, credential_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.middleware("http")(catch_unhandled_errors)
