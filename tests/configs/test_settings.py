"""Tests for application settings."""

from pydantic import ValidationError
from pytest import MonkeyPatch, raises

from app.configs import CONFIG_MAP
from app.configs.settings import MissingSettingsError, load_settings


class TestLoadSettings:
    """Test cases for load_settings."""

    def test_reads_environment(self) -> None:
        settings = load_settings(env_file=None)
        assert settings.DATABASE_URL == "sqlite+aiosqlite://"
        assert settings.PORT == 8000
        assert settings.ENVIRONMENT == "test"
        assert settings.is_production is False

    def test_defaults(self) -> None:
        settings = load_settings(env_file=None)
        assert settings.SLUG_CONFLICT_RETRIES == 3
        assert settings.ALGORITHM == "HS256"
        assert settings.HOST == "127.0.0.1"

    def test_missing_required(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_URL")
        monkeypatch.delenv("SECRET_KEY")

        with raises(MissingSettingsError) as exc_info:
            load_settings(env_file=None)

        assert exc_info.value.missing == ["DATABASE_URL", "SECRET_KEY"]
        assert "DATABASE_URL" in str(exc_info.value)

    def test_invalid_value_is_not_reported_as_missing(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "not-a-port")
        with raises(ValidationError):
            load_settings(env_file=None)

    def test_production_flag(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        assert load_settings(env_file=None).is_production is True


class TestArgon2Config:
    """Test cases for the password cost table."""

    def test_levels_increase_cost(self) -> None:
        low, medium, high = CONFIG_MAP["low"], CONFIG_MAP["medium"], CONFIG_MAP["high"]
        assert low.memory_cost < medium.memory_cost < high.memory_cost
        assert low.time_cost <= medium.time_cost <= high.time_cost
