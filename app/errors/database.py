from logging import getLogger

from app.configs import file_logger
from app.errors.api import ConflictError
from app.errors.base import BaseAppError, ErrorKind, create_exception_handler

logger = file_logger(getLogger(__name__))


class DatabaseError(BaseAppError):
    """Base exception for database errors."""

    kind = ErrorKind.INTERNAL
    default_detail = "Database Error"


class DatabaseConnectionError(DatabaseError):
    """Exception raised when database connection fails."""

    default_detail = "Failed to connect to the database"


class DatabaseInitializationError(DatabaseError):
    """Exception raised when database initialization fails."""

    default_detail = "Failed to initialize database"


class DuplicateEntryError(ConflictError):
    """Exception raised when attempting to create a duplicate entry."""

    default_detail = "A record with this value already exists"


class SlugConflictError(DuplicateEntryError):
    """Exception raised when a slug lost a race against a concurrent write."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"A post with slug '{slug}' already exists")
        self.slug = slug


database_exception_handler = create_exception_handler(logger)
