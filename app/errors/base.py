from collections.abc import Awaitable, Callable
from enum import StrEnum
from logging import Logger
from traceback import format_exception

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from app.configs import settings
from app.configs.settings import DEFAULT_ERROR_MESSAGE
from app.utils.helpers import host


class ErrorKind(StrEnum):
    """Operational error kinds understood by the HTTP boundary."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: HTTP_400_BAD_REQUEST,
    ErrorKind.AUTHENTICATION: HTTP_401_UNAUTHORIZED,
    ErrorKind.AUTHORIZATION: HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: HTTP_500_INTERNAL_SERVER_ERROR,
}


class BaseAppError(Exception):
    """
    Base exception class for application errors.

    Every error carries a ``kind`` tag and a message that is safe to show to
    API callers. The HTTP status is never stored on the error; it is looked up
    in ``STATUS_BY_KIND``.
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    default_detail: str = "Internal Server Error"

    def __init__(self, detail: str | None = None, kind: ErrorKind | None = None) -> None:
        self.detail = detail or self.default_detail
        if kind is not None:
            self.kind = kind
        super().__init__(self.detail)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    @property
    def is_operational(self) -> bool:
        return self.kind is not ErrorKind.INTERNAL

    def __str__(self) -> str:
        return self.detail


def error_status(status_code: int) -> str:
    """Return the envelope status word for an HTTP status code."""
    return "fail" if 400 <= status_code < 500 else "error"


def error_body(detail: str, status_code: int) -> dict[str, object]:
    """Build the JSON envelope for an error response."""
    return {"status": error_status(status_code), "message": detail}


def create_exception_handler(
    logger: Logger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for operational errors.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = HTTP_500_INTERNAL_SERVER_ERROR
        detail = DEFAULT_ERROR_MESSAGE

        if isinstance(exc, BaseAppError) and exc.is_operational:
            status_code = exc.status_code
            detail = exc.detail
            logger.warning(f"{detail} for ip: {host(request)} for endpoint {request.url.path}")
        else:
            logger.error(
                f"Unexpected error for ip: {host(request)} for endpoint {request.url.path}",
                exc_info=exc,
            )

        content = error_body(detail, status_code)
        if status_code == HTTP_500_INTERNAL_SERVER_ERROR and settings.DEBUG:
            content["error"] = repr(exc)
            content["stack"] = format_exception(exc)

        return ORJSONResponse(content=content, status_code=status_code)

    return handler
