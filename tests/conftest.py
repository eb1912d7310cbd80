# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Required settings must exist before app is imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["PORT"] = "8000"
os.environ["ENVIRONMENT"] = "test"
os.environ["PASSWORD_SECURITY_LEVEL"] = "low"
os.environ["DATABASE_AUTO_CREATE"] = "false"
os.environ["LOG_TO_FILE"] = "false"

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402
from typing import Any  # noqa: E402

from httpx import ASGITransport, AsyncClient  # noqa: E402
from pytest import fixture  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.db import Database  # noqa: E402
from app.main import app  # noqa: E402
from app.models import UserDB  # noqa: E402

TEST_PASSWORD = "s3cret!"
FAKE_HASH = "$argon2id$v=19$m=8192,t=1,p=1$c29tZXNhbHQ$c29tZWhhc2g"

type RegisterUser = Callable[..., Awaitable[dict[str, Any]]]


@fixture
async def database() -> AsyncGenerator[Database]:
    """In-memory SQLite database shared by every session of one test."""
    db = Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.create_all()
    yield db
    await db.dispose()


@fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession]:
    """Session for repository and service tests."""
    async with database.session_maker() as session:
        yield session


@fixture
async def client(database: Database) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing FastAPI endpoints."""
    app.state.database = database
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    del app.state.database


@fixture
def register_user(client: AsyncClient) -> RegisterUser:
    """Register a user through the API and return ``{"id", "token", "user"}``."""

    async def register(
        name: str = "Ada Lovelace",
        email: str = "ada@example.com",
        password: str = TEST_PASSWORD,
    ) -> dict[str, Any]:
        response = await client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return {"id": data["user"]["id"], "token": data["token"], "user": data["user"]}

    return register


@fixture
def make_user(session: AsyncSession) -> Callable[..., Awaitable[UserDB]]:
    """Insert users directly, bypassing password hashing."""

    async def make(name: str = "Ada Lovelace", email: str = "ada@example.com") -> UserDB:
        user = UserDB(name=name, email=email, password_hash=FAKE_HASH)
        session.add(user)
        await session.commit()
        return user

    return make
