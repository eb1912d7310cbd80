"""User repository for database operations."""

from typing import cast
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.sql.expression import ColumnElement

from app.errors.database import DuplicateEntryError
from app.models.user import UserDB
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserDB]):
    """
    Repository for User database operations.

    Emails are expected already normalised (trimmed, lower-cased) by the
    request schemas; lookups compare them as stored.
    """

    model = UserDB

    async def create(self, name: str, email: str, password_hash: str) -> UserDB:
        """
        Create a new user in the database.

        Args:
            name: Display name
            email: Normalised email address
            password_hash: Argon2 hash of the password

        Returns:
            UserDB: Created user database model

        Raises:
            DuplicateEntryError: If the email already exists
            DatabaseError: For other database errors
        """
        db_user = UserDB(name=name, email=email, password_hash=password_hash)
        try:
            return await self._add_and_refresh(db_user)
        except DuplicateEntryError as e:
            raise DuplicateEntryError(detail="Email already registered") from e

    async def get_by_id(self, user_id: UUID) -> UserDB | None:
        """
        Get user by ID.

        Args:
            user_id: User UUID

        Returns:
            UserDB | None: User if found, None otherwise
        """
        return await self._first(
            select(UserDB).where(cast(ColumnElement[bool], UserDB.id == user_id)),
        )

    async def get_by_email(self, email: str) -> UserDB | None:
        """
        Get user by email.

        Args:
            email: Email to search for

        Returns:
            UserDB | None: User if found, None otherwise
        """
        return await self._first(
            select(UserDB).where(cast(ColumnElement[bool], UserDB.email == email)),
        )

    async def email_exists(self, email: str) -> bool:
        return await self._check_exists_by_field("email", email)
