"""Centralized configuration management for the ordinal tree engine.

Settings come from environment variables and an optional ``.env`` file.
The engine itself never reads them: operations take an explicit root, and
``resolve_root`` is the adapter that turns a symbolic root key into one.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings

from ..exceptions import RootNotConfiguredError

DEFAULT_ROOT_KEY = "default"


class Settings(BaseSettings):
    """Centralized settings for the ordinal tree engine."""

    # === Document Roots ===
    public_folders: dict[str, str] = Field(
        default_factory=dict, description="Symbolic root key -> directory (JSON in PUBLIC_FOLDERS)"
    )
    document_root_dir: str = Field(
        default=".documents_storage", description="Directory served under the 'default' root key"
    )

    # === Logging Configuration ===
    log_level: str = Field(default="INFO", description="Logging level")
    structured_logging: bool = Field(default=True, description="Enable structured JSON error logging")
    log_file: str | None = Field(default=None, description="Rotating call log file; disabled when unset")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    def root_for_key(self, root_key: str) -> Path | None:
        """Return the configured directory for ``root_key`` without validating it."""
        if root_key in self.public_folders:
            return Path(self.public_folders[root_key])
        if root_key == DEFAULT_ROOT_KEY:
            return Path(self.document_root_dir)
        return None


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        load_dotenv()  # Load .env file
        _settings = Settings()
    return _settings


def reset_settings():
    """Reset the global settings instance (primarily for testing)."""
    global _settings
    _settings = None


def resolve_root(root_key: str, settings: Settings | None = None) -> Path:
    """Resolve a symbolic root key to an absolute, existing directory.

    Raises:
        RootNotConfiguredError: If the key is unknown or its directory is missing.
    """
    settings = settings or get_settings()
    configured = settings.root_for_key(root_key)
    if configured is None:
        raise RootNotConfiguredError(root_key)

    root = configured.expanduser().resolve()
    if not root.is_dir():
        raise RootNotConfiguredError(root_key, details={"path": str(root)})
    return root
