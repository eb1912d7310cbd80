from app.configs.settings import (
    CONFIG_MAP,
    Argon2Config,
    MissingSettingsError,
    Settings,
    file_logger,
    load_settings,
    settings,
)

__all__ = [
    "Argon2Config",
    "MissingSettingsError",
    "Settings",
    "file_logger",
    "load_settings",
    "settings",
    "CONFIG_MAP",
]
