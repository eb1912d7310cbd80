from app.errors.base import BaseAppError, ErrorKind


class PasswordHashingError(BaseAppError):
    """Base error for password hasher module."""

    kind = ErrorKind.INTERNAL
    default_detail = "Password hashing failed"
