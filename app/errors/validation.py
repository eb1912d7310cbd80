"""Custom validation error handling for FastAPI."""

from logging import getLogger
from typing import cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from app.configs import file_logger
from app.errors.base import error_body
from app.utils.helpers import host

logger = file_logger(getLogger(__name__))

# Location prefixes FastAPI adds in front of the field name
_LOCATIONS = frozenset({"body", "query", "path", "header", "cookie"})

# Friendlier messages for path parameters, keyed by field name
_PATH_MESSAGES = {
    "post_id": "Invalid post ID",
    "author": "Invalid author ID",
}


def _field_name(loc: tuple | list) -> str:
    parts = [str(part) for part in loc]
    if parts and parts[0] in _LOCATIONS:
        parts = parts[1:]
    return ".".join(parts)


def format_validation_errors(exc: RequestValidationError) -> list[dict]:
    """
    Flatten pydantic error details into ``{field, message, type}`` records.

    Args:
        exc: The RequestValidationError exception.

    Returns:
        list[dict]: One record per failed field
    """
    formatted_errors = []
    for error in exc.errors():
        field = _field_name(error.get("loc", []))
        message = error.get("msg", "Invalid value")
        if error.get("type") in {"uuid_parsing", "uuid_type"} and field in _PATH_MESSAGES:
            message = _PATH_MESSAGES[field]
        formatted_errors.append(
            {
                "field": field,
                "message": message.removeprefix("Value error, "),
                "type": error.get("type", "validation_error"),
            },
        )
    return formatted_errors


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle request validation errors with the standard error envelope.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with a 400 status and the formatted errors.
    """
    formatted_errors = format_validation_errors(cast(RequestValidationError, exc))

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {formatted_errors}",
    )

    content = error_body(
        ". ".join(error["message"] for error in formatted_errors) or "Invalid input data",
        HTTP_400_BAD_REQUEST,
    )
    content["errors"] = formatted_errors
    return ORJSONResponse(status_code=HTTP_400_BAD_REQUEST, content=content)
