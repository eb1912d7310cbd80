"""Base repository for database operations."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
)

type FilterValue = str | int | float | bool | UUID | datetime | None


class BaseRepository[ModelT: SQLModel]:
    """
    Base repository implementing the shared persistence helpers.

    Entity repositories extend it with their own read and write methods and
    keep raw SQLAlchemy errors from leaking past the repository layer.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
    """

    model: type[ModelT]
    id_field: str = "id"

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    @property
    def dialect(self) -> str:
        """Name of the SQL dialect the session is bound to."""
        bind = self.session.bind
        return bind.dialect.name if bind is not None else ""

    async def _first(self, statement: Select[tuple[ModelT]]) -> ModelT | None:
        """
        Execute ``statement`` and return the first row, if any.

        Args:
            statement: A ``select`` of the model

        Returns:
            ModelT | None: First record, or None when nothing matches
        """
        result = await self.session.execute(statement.limit(1))
        return result.scalars().first()

    async def _count(self, *conditions: ColumnElement[bool]) -> int:
        """
        Count records matching ``conditions``.

        Returns:
            int: Number of matching records
        """
        statement = select(func.count()).select_from(self.model).where(*conditions)
        result = await self.session.execute(statement)
        count = result.scalar()
        return count if count is not None else 0

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        Args:
            record: Record to add

        Returns:
            ModelT: Refreshed record

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other database errors
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
            return record
        except IntegrityError as e:
            await self.session.rollback()
            raise self._integrity_error(e) from e
        except Exception as e:
            await self.session.rollback()
            raise DatabaseConnectionError(
                detail=f"Failed to save record: {e}",
            ) from e

    async def _flush(self) -> None:
        """
        Flush pending changes with the same error translation as inserts.

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other database errors
        """
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise self._integrity_error(e) from e

    @staticmethod
    def _integrity_error(e: IntegrityError) -> DatabaseError | DuplicateEntryError:
        error_msg = str(e.orig) if e.orig else str(e)
        if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
            return DuplicateEntryError(detail=error_msg)
        return DatabaseError(detail=f"Database integrity error: {error_msg}")

    async def _check_exists_by_field(
        self,
        field_name: str,
        value: FilterValue,
        exclude_id: UUID | None = None,
        *conditions: ColumnElement[bool],
    ) -> bool:
        """
        Check if a record exists with a specific field value.

        Args:
            field_name: Name of the field to check
            value: Value to check for
            exclude_id: Optional ID to exclude from check (for updates)
            *conditions: Extra conditions the record must also satisfy

        Returns:
            bool: True if record exists, False otherwise
        """
        field = getattr(self.model, field_name)
        statement = select(1).select_from(self.model).where(field == value, *conditions)

        if exclude_id is not None:
            id_column = getattr(self.model, self.id_field)
            statement = statement.where(id_column != exclude_id)

        statement = statement.limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None
