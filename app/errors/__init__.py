from app.errors.api import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
    app_exception_handler,
    http_exception_handler,
)
from app.errors.base import (
    STATUS_BY_KIND,
    BaseAppError,
    ErrorKind,
    create_exception_handler,
    error_body,
)
from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DatabaseInitializationError,
    DuplicateEntryError,
    SlugConflictError,
    database_exception_handler,
)
from app.errors.password_hasher import PasswordHashingError
from app.errors.validation import validation_exception_handler

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "BaseAppError",
    "ConflictError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DatabaseInitializationError",
    "DuplicateEntryError",
    "ErrorKind",
    "NotFoundError",
    "PasswordHashingError",
    "STATUS_BY_KIND",
    "SlugConflictError",
    "ValidationError",
    "app_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "error_body",
    "http_exception_handler",
    "validation_exception_handler",
]
