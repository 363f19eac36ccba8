"""Mapping from service errors to the JSON error envelope.

Every error response is {"status": <code>} with the matching HTTP status.
Details go to the server log only.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from microblog.services.errors import (
    AlreadyExistsError,
    ForbiddenError,
    InternalError,
    InvalidInputError,
    NotFoundError,
    ServiceError,
    StoreUnavailableError,
    TokenError,
)

logger = logging.getLogger(__name__)

# Exception class -> status code; looked up along the MRO
EXCEPTION_STATUS_MAP: dict[type[ServiceError], int] = {
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    AlreadyExistsError: status.HTTP_403_FORBIDDEN,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StoreUnavailableError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: ServiceError) -> int:
    """HTTP status for a service error, defaulting to 500."""
    for cls in type(exc).__mro__:
        if cls in EXCEPTION_STATUS_MAP:
            return EXCEPTION_STATUS_MAP[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": status_code})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that turn every failure into the error envelope."""

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
        status_code = status_for(exc)
        context = {
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "token_failure": exc.failure.value if isinstance(exc, TokenError) else None,
        }
        message = (
            f"{request.method} {request.url.path} -> {status_code}: "
            f"{type(exc).__name__}: {exc.message}"
        )
        if status_code >= 500:
            logger.error(message, exc_info=exc, extra=context)
        else:
            logger.warning(message, extra=context)
        return error_response(status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Only locations and error types; inputs may contain passwords
        problems = [(".".join(map(str, e["loc"])), e["type"]) for e in exc.errors()]
        logger.warning(f"{request.method} {request.url.path} -> 400: {problems}")
        return error_response(status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return error_response(exc.status_code)

    @app.exception_handler(Exception)
    async def handle_uncaught(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR)
