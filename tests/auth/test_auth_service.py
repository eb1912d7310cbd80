"""Tests for AuthService against a real repository."""

from unittest.mock import AsyncMock, patch

from pytest import fixture, raises
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import AuthenticationError, ConflictError
from app.managers.token_manager import decode_access_token
from app.repositories import UserRepository
from app.services import AuthService


@fixture
def auth_service(session: AsyncSession) -> AuthService:
    return AuthService(UserRepository(session))


class TestRegister:
    """Test cases for registration."""

    async def test_creates_user_and_token(self, auth_service: AuthService) -> None:
        auth = await auth_service.register("Ada Lovelace", "ada@example.com", "s3cret!")

        assert auth.user.name == "Ada Lovelace"
        assert auth.user.email == "ada@example.com"
        token_data = decode_access_token(auth.token)
        assert token_data is not None
        assert token_data.user_id == auth.user.id

    async def test_password_is_hashed(
        self,
        auth_service: AuthService,
        session: AsyncSession,
    ) -> None:
        auth = await auth_service.register("Ada Lovelace", "ada@example.com", "s3cret!")
        stored = await UserRepository(session).get_by_id(auth.user.id)

        assert stored is not None
        assert stored.password_hash != "s3cret!"
        assert stored.password_hash.startswith("$argon2id$")

    async def test_email_is_normalised(self, auth_service: AuthService) -> None:
        auth = await auth_service.register("Ada Lovelace", "  Ada@Example.COM ", "s3cret!")
        assert auth.user.email == "ada@example.com"

    async def test_duplicate_email(self, auth_service: AuthService) -> None:
        await auth_service.register("Ada Lovelace", "ada@example.com", "s3cret!")
        with raises(ConflictError, match="Email already registered"):
            await auth_service.register("Other Ada", "ADA@example.com", "s3cret!")


class TestLogin:
    """Test cases for login."""

    async def test_valid_credentials(self, auth_service: AuthService) -> None:
        registered = await auth_service.register("Ada Lovelace", "ada@example.com", "s3cret!")
        auth = await auth_service.login("ada@example.com", "s3cret!")

        assert auth.user.id == registered.user.id
        token_data = decode_access_token(auth.token)
        assert token_data is not None
        assert token_data.user_id == registered.user.id

    async def test_email_case_insensitive(self, auth_service: AuthService) -> None:
        await auth_service.register("Ada Lovelace", "ada@example.com", "s3cret!")
        auth = await auth_service.login("ADA@Example.com", "s3cret!")
        assert auth.user.email == "ada@example.com"

    async def test_wrong_password(self, auth_service: AuthService) -> None:
        await auth_service.register("Ada Lovelace", "ada@example.com", "s3cret!")
        with raises(AuthenticationError) as exc_info:
            await auth_service.login("ada@example.com", "wrong-password")
        assert exc_info.value.detail == "Invalid email or password"

    async def test_unknown_email_same_error(self, auth_service: AuthService) -> None:
        """Unknown accounts fail exactly like wrong passwords and still verify a dummy hash."""
        with (
            patch("app.services.auth.dummy_verify", new=AsyncMock(return_value=False)) as dummy,
            raises(AuthenticationError) as exc_info,
        ):
            await auth_service.login("nobody@example.com", "s3cret!")

        assert exc_info.value.detail == "Invalid email or password"
        dummy.assert_awaited_once()
