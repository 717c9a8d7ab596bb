"""
Configuration Management.

Loads overrides from the environment (or config/.env) and settings from
config/settings/*.yaml.

Overrides (.env / environment, NOTEKEEPER_ prefix):
    NOTEKEEPER_SERVER_URL, NOTEKEEPER_API_BASE

Settings (YAML):
    application.yaml   - App identity, Notes Store address, session behaviour
    logging.yaml       - Logging configuration
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from notekeeper.core.config_schema import (
    ApplicationSchema,
    LoggingSchema,
    SessionSchema,
)
from notekeeper.core.exceptions import ConfigurationError


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def validate_project_root() -> Path:
    """
    Validate that the project root can be found.

    Raises SystemExit with a clear message if .project_root is not found.
    Use this in entry scripts before any configuration loading.
    """
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Per-machine overrides loaded from the environment or config/.env."""

    server_url: str | None = None
    api_base: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="NOTEKEEPER_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_settings() -> Settings:
    """Get cached overrides instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def join_base_url(server_url: str, api_base: str) -> str:
    """
    Combine the store origin and the API base path.

    An absolute api_base (http:// or https://) replaces the origin entirely.
    """
    if api_base.startswith(("http://", "https://")):
        return api_base.rstrip("/")
    path = "/" + api_base.strip("/") if api_base.strip("/") else ""
    return server_url.rstrip("/") + path


def get_store_base_url() -> tuple[str, float | None]:
    """
    Get the Notes Store base URL and request timeout.

    Environment overrides win over application.yaml.

    Returns:
        Tuple of (base_url, timeout_seconds). A timeout of None waits indefinitely.
    """
    store = get_app_config().application.store
    settings = get_settings()
    server_url = settings.server_url or store.server_url
    api_base = settings.api_base if settings.api_base is not None else store.api_base
    return join_base_url(server_url, api_base), store.timeout


def get_session_config() -> SessionSchema:
    """Get the note-session behaviour flags from application.yaml."""
    return get_app_config().application.session
