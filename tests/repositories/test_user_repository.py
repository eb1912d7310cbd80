"""Tests for UserRepository on SQLite."""

from uuid import uuid4

from pytest import fixture, raises
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import ConflictError
from app.repositories import UserRepository


@fixture
def repo(session: AsyncSession) -> UserRepository:
    return UserRepository(session)


class TestUserRepository:
    """Test cases for UserRepository."""

    async def test_create_and_lookup(self, session: AsyncSession, repo: UserRepository) -> None:
        user = await repo.create(name="Ada Lovelace", email="ada@example.com", password_hash="hash")
        await session.commit()

        assert (await repo.get_by_id(user.id)) is not None
        found = await repo.get_by_email("ada@example.com")
        assert found is not None
        assert found.id == user.id
        assert await repo.email_exists("ada@example.com") is True
        assert await repo.email_exists("grace@example.com") is False
        assert await repo.get_by_id(uuid4()) is None

    async def test_duplicate_email(self, session: AsyncSession, repo: UserRepository) -> None:
        await repo.create(name="Ada Lovelace", email="ada@example.com", password_hash="hash")
        await session.commit()

        with raises(ConflictError, match="Email already registered"):
            await repo.create(name="Ada Again", email="ada@example.com", password_hash="hash")
