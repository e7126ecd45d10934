"""Mapping of errors to HTTP responses.

Every error response has the body {"error": "<message>"}. Validation
messages are returned as-is; internal failures get a fixed message and
the full detail only goes to the log.
"""

import time

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from shorturl.core.errors import ErrorKind
from shorturl.middleware.logging import get_client_ip
from shorturl.services.exceptions import ServiceError

INTERNAL_ERROR_MESSAGE = "Internal server error"

STATUS_BY_KIND = {
    ErrorKind.INVALID_URL: status.HTTP_400_BAD_REQUEST,
    ErrorKind.EMPTY_SHORT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.COLLISION_EXHAUSTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.ID_EXISTS: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.ID_GENERATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Messages for kinds whose exception text must not reach the client
PUBLIC_MESSAGES = {
    ErrorKind.NOT_FOUND: "The requested URL could not be found",
    ErrorKind.COLLISION_EXHAUSTED: "Could not allocate a unique short ID, please try again",
    ErrorKind.ID_EXISTS: "Could not allocate a unique short ID, please try again",
    ErrorKind.ID_GENERATION: INTERNAL_ERROR_MESSAGE,
    ErrorKind.STORAGE: INTERNAL_ERROR_MESSAGE,
}


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Translate a service error into a response based on its kind."""
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    message = PUBLIC_MESSAGES.get(exc.kind, str(exc))

    log = logger.bind(
        client_ip=get_client_ip(request),
        error_kind=exc.kind.value,
        short_id=exc.short_id,
    )
    if status_code >= 500:
        log.opt(exception=exc).error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        log.info(f"{request.method} {request.url.path} rejected: {exc}")

    return error_response(status_code, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap framework HTTP errors (404 route, 405 method) in the error envelope."""
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Treat unparseable or mistyped request bodies as bad requests."""
    errors = exc.errors()
    logger.bind(client_ip=get_client_ip(request)).info(
        f"Request validation error on {request.method} {request.url.path}: {errors}"
    )
    if any(error.get("type") == "json_invalid" for error in errors):
        return error_response(status.HTTP_400_BAD_REQUEST, "Malformed JSON body")
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log an unexpected exception with an error id and hide its detail."""
    error_id = f"error-{time.time()}"
    logger.bind(
        error_id=error_id,
        method=request.method,
        path=request.url.path,
        client_ip=get_client_ip(request),
    ).opt(exception=exc).error(f"Unhandled exception in {request.method} {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
