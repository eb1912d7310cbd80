"""Authentication service handling registration and password login."""

from logging import getLogger

from app.configs import file_logger
from app.configs.settings import INVALID_CREDENTIALS_MESSAGE
from app.errors import AuthenticationError, ConflictError
from app.managers.password_manager import dummy_verify, hash_password, verify_password
from app.managers.token_manager import create_access_token
from app.models import UserDB
from app.repositories import UserRepository
from app.schemas.auth import AuthData
from app.schemas.user import UserResponse, normalize_email

logger = file_logger(getLogger(__name__))


class AuthService:
    """Service for registering users and exchanging credentials for tokens."""

    def __init__(self, user_repo: UserRepository) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: User repository for database operations
        """
        self.user_repo = user_repo

    async def register(self, name: str, email: str, password: str) -> AuthData:
        """
        Register a new user and issue a token.

        Args:
            name: Display name
            email: Email address
            password: Plaintext password

        Returns:
            AuthData: Public user fields and a bearer token

        Raises:
            ConflictError: If the email is already registered
        """
        email = normalize_email(email)
        if await self.user_repo.email_exists(email):
            raise ConflictError("Email already registered")

        password_hash = await hash_password(password)
        user = await self.user_repo.create(name=name, email=email, password_hash=password_hash)
        logger.info(f"User registered: {user.id}")
        return self._auth_data(user)

    async def login(self, email: str, password: str) -> AuthData:
        """
        Exchange an email and password for a token.

        Unknown emails and wrong passwords fail the same way, and unknown
        emails still pay for a password verification.

        Args:
            email: Email address
            password: Plaintext password

        Returns:
            AuthData: Public user fields and a bearer token

        Raises:
            AuthenticationError: If the credentials do not match a user
        """
        user = await self.user_repo.get_by_email(normalize_email(email))
        if user is None:
            await dummy_verify()
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        if not await verify_password(password, user.password_hash):
            logger.info(f"Failed login for user {user.id}")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        return self._auth_data(user)

    @staticmethod
    def _auth_data(user: UserDB) -> AuthData:
        return AuthData(user=UserResponse.from_db(user), token=create_access_token(user.id))
