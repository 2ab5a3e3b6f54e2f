"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. FIELDREPORT_ENV_FILE environment variable (path to a .env file)
3. config/.env - local configuration next to the project

All variables use the ``FIELDREPORT_`` prefix, e.g. ``FIELDREPORT_DATA_DIR``.
Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / "pyproject.toml").is_file():
            return parent

    return Path.cwd()


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. FIELDREPORT_ENV_FILE env var
    2. config/.env
    """
    env_file_path = os.environ.get("FIELDREPORT_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    env_file = get_config_dir() / ".env"
    if env_file.exists():
        return env_file

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="FIELDREPORT_",
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "fieldreport"

    # Local storage
    data_dir: Path = Path.home() / ".fieldreport"
    database_url: str = ""  # Empty = sqlite file inside data_dir
    photo_dir: Path | None = None  # None = data_dir / "photos"

    # Remote mirror (MIRROR_ prefix)
    mirror_enabled: bool = True  # False = always offline, nothing is sent
    mirror_base_url: str = "https://jsonplaceholder.typicode.com"
    mirror_timeout: float = 30.0
    mirror_probe_path: str = "/posts/1"
    mirror_collection_path: str = "/posts"

    # Bootstrap account created on first initialization
    bootstrap_username: str = "user"
    bootstrap_password: SecretStr = SecretStr("user")
    bootstrap_full_name: str = "Default user"
    bootstrap_email: str = "user@fieldreport.local"

    # Security
    password_hash_rounds: int = 12

    # Logging
    log_level: str = "INFO"

    @field_validator("mirror_base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("password_hash_rounds")
    @classmethod
    def _validate_rounds(cls, v: int) -> int:
        # bcrypt only accepts work factors in this range
        if not 4 <= v <= 31:
            msg = "password_hash_rounds must be between 4 and 31"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def _derive_paths(self) -> Settings:
        if not self.database_url:
            self.database_url = f"sqlite+aiosqlite:///{self.data_dir / 'fieldreport.db'}"
        if self.photo_dir is None:
            self.photo_dir = self.data_dir / "photos"
        return self

    @property
    def mirror_host(self) -> str:
        """Host name of the mirror endpoint (used for reachability checks)."""
        without_scheme = self.mirror_base_url.split("://", 1)[-1]
        return without_scheme.split("/", 1)[0].split(":", 1)[0]


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
