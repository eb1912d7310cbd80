"""Operational errors raised by services and the HTTP boundary."""

from logging import getLogger
from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_404_NOT_FOUND

from app.configs import file_logger
from app.errors.base import BaseAppError, ErrorKind, create_exception_handler, error_body
from app.utils.helpers import host

logger = file_logger(getLogger(__name__))


class ValidationError(BaseAppError):
    """Bad input shape or content."""

    kind = ErrorKind.VALIDATION
    default_detail = "Invalid input data"


class AuthenticationError(BaseAppError):
    """Missing, invalid or expired credentials."""

    kind = ErrorKind.AUTHENTICATION
    default_detail = "Authentication failed"


class AuthorizationError(BaseAppError):
    """Authenticated but not permitted."""

    kind = ErrorKind.AUTHORIZATION
    default_detail = "You do not have permission to perform this action"


class NotFoundError(BaseAppError):
    """No such resource, or the resource is hidden from the caller."""

    kind = ErrorKind.NOT_FOUND
    default_detail = "Resource not found"


class ConflictError(BaseAppError):
    """Uniqueness violation."""

    kind = ErrorKind.CONFLICT
    default_detail = "Resource conflict"


app_exception_handler = create_exception_handler(logger)


async def http_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """
    Wrap Starlette HTTP errors (unknown routes, bad methods) in the error envelope.

    Args:
        request: The incoming request.
        exc: The StarletteHTTPException raised by routing.

    Returns:
        ORJSONResponse with the original status code.
    """
    http_exc = cast(StarletteHTTPException, exc)
    detail = str(http_exc.detail)
    if http_exc.status_code == HTTP_404_NOT_FOUND and detail == "Not Found":
        detail = f"Route {request.url.path} not found"

    logger.info(f"{detail} for ip: {host(request)}")
    return ORJSONResponse(
        content=error_body(detail, http_exc.status_code),
        status_code=http_exc.status_code,
        headers=getattr(http_exc, "headers", None),
    )
