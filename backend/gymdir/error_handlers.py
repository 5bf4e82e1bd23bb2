"""
Exception handlers.

Every error leaves the API as ``{"status": <int>, "message": <str>}``.
Messages for server-side failures are generic; details go to the log.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gymdir.exceptions import (
    ConcurrentModificationError,
    GymDirectoryError,
    GymNotFoundError,
    NotFoundError,
    ReviewIntegrityError,
    ReviewNotAllowedError,
    StorageError,
)

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "an unexpected error occurred"


def error_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": status_code, "message": message},
        headers=headers,
    )


def format_validation_errors(exc: RequestValidationError) -> str:
    """Join field errors as ``field: message`` pairs."""
    parts = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "request"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")
    return ", ".join(parts)


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("Not found on %s %s: %s", request.method, request.url.path, exc)
    if isinstance(exc, GymNotFoundError):
        message = "the specific gym wasn't found"
    else:
        message = "the specific review wasn't found"
    return error_response(status.HTTP_404_NOT_FOUND, message)


async def handle_review_not_allowed(request: Request, exc: ReviewNotAllowedError) -> JSONResponse:
    logger.warning("Review rejected on %s %s: %s", request.method, request.url.path, exc)
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = format_validation_errors(exc)
    logger.info("Validation failed on %s %s: %s", request.method, request.url.path, message)
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def handle_concurrent_modification(
    request: Request, exc: ConcurrentModificationError
) -> JSONResponse:
    logger.warning("Write conflict on %s %s: %s", request.method, request.url.path, exc)
    return error_response(
        status.HTTP_409_CONFLICT,
        "the gym was changed by another request, reload and try again",
    )


async def handle_storage_error(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "unable to save or retrieve resources at this time",
    )


async def handle_integrity_error(request: Request, exc: ReviewIntegrityError) -> JSONResponse:
    logger.critical(
        "Data integrity fault on %s %s", request.method, request.url.path, exc_info=exc
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_MESSAGE)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unexpected error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(ReviewNotAllowedError, handle_review_not_allowed)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(ConcurrentModificationError, handle_concurrent_modification)
    app.add_exception_handler(StorageError, handle_storage_error)
    app.add_exception_handler(ReviewIntegrityError, handle_integrity_error)
    app.add_exception_handler(GymDirectoryError, handle_unexpected)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected)
