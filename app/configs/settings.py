"""Application settings and configuration constants.

This module contains application settings, constants, and configuration
values for the Inkwell blog backend. Settings are read from the process
environment and an optional ``.env`` file at the project root.
"""

from dataclasses import dataclass
from logging import INFO, Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal

from pydantic import ValidationError
from pydantic_settings.main import BaseSettings, SettingsConfigDict
from pythonjsonlogger.json import JsonFormatter

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Constants ---
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50
MIN_PASSWORD_LENGTH = 6
MIN_TITLE_LENGTH = 3
MAX_TITLE_LENGTH = 200
MIN_CONTENT_LENGTH = 10
MAX_TAG_LENGTH = 30
MAX_SLUG_LENGTH = 300

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Response constants
DEFAULT_ERROR_MESSAGE = "Something went wrong"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class MissingSettingsError(RuntimeError):
    """Raised at startup when required environment variables are absent."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing required environment variables: {', '.join(missing)}")


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Inkwell Blog API"
    DEBUG: bool = False

    # Required runtime configuration
    DATABASE_URL: str
    SECRET_KEY: str
    PORT: int

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"
    HOST: str = "127.0.0.1"
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE: str = "logs/app.log"
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Database
    DATABASE_ECHO: bool = False
    DATABASE_AUTO_CREATE: bool = True
    POOL_SIZE: int = 10
    MAX_OVERFLOW: int = 5
    POOL_TIMEOUT: int = 5  # seconds
    POOL_RECYCLE: int = 1800  # seconds

    # Tokens
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    JWT_ISSUER: str = "inkwell-api"
    JWT_AUDIENCE: str = "inkwell-clients"

    # Passwords
    PASSWORD_SECURITY_LEVEL: Literal["low", "medium", "high"] = "medium"

    # Posts
    SLUG_CONFLICT_RETRIES: int = 3

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@dataclass(frozen=True)
class Argon2Config:
    """Argon2id cost parameters for one security level."""

    memory_cost: int  # KiB
    time_cost: int
    parallelism: int


CONFIG_MAP: dict[str, Argon2Config] = {
    "low": Argon2Config(memory_cost=8 * 1024, time_cost=1, parallelism=1),
    "medium": Argon2Config(memory_cost=64 * 1024, time_cost=2, parallelism=2),
    "high": Argon2Config(memory_cost=256 * 1024, time_cost=3, parallelism=4),
}


def load_settings(env_file: Path | None = ENV_FILE) -> Settings:
    """
    Build the settings object, failing fast on missing required variables.

    Args:
        env_file: Dotenv file to read besides the environment, or None to skip it

    Returns:
        Settings: Validated application settings

    Raises:
        MissingSettingsError: If DATABASE_URL, SECRET_KEY or PORT is absent
    """
    try:
        return Settings(_env_file=env_file)  # pyrefly: ignore [missing-argument]
    except ValidationError as e:
        missing = [
            ".".join(str(part) for part in error["loc"])
            for error in e.errors()
            if error["type"] == "missing"
        ]
        if missing:
            raise MissingSettingsError(missing) from e
        raise


settings = load_settings()


def file_logger(logger: Logger) -> Logger:
    """
    Attach the rotating JSON file handler to a logger when file logging is enabled.

    Args:
        logger: Logger to decorate

    Returns:
        Logger: The same logger, for inline use
    """
    if not settings.LOG_TO_FILE:
        return logger

    log_file = Path(settings.LOG_FILE)
    if any(
        isinstance(handler, RotatingFileHandler)
        and Path(handler.baseFilename) == log_file.resolve()
        for handler in logger.handlers
    ):
        return logger

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=5)
    handler.setLevel(INFO)
    handler.setFormatter(JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    return logger
