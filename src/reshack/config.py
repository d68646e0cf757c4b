"""Configuration management for reshack."""

from __future__ import annotations

import shutil
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

DEFAULT_EXECUTABLE = "ResourceHacker.exe"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_HELP_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_OUTPUT_BYTES = 10 * 1024 * 1024


class Settings(BaseSettings):
    """Process-wide settings, read once at startup."""

    model_config = SettingsConfigDict(
        env_prefix="RESHACK_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    executable: str = Field(
        default=DEFAULT_EXECUTABLE,
        validation_alias=AliasChoices("RESOURCE_HACKER_PATH", "RESHACK_EXECUTABLE", "executable"),
        description="Resource Hacker executable name or path",
    )
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0, description="Timeout for editor runs")
    help_timeout_seconds: float = Field(
        default=DEFAULT_HELP_TIMEOUT_SECONDS, gt=0, description="Timeout for help requests"
    )
    max_output_bytes: int = Field(
        default=DEFAULT_MAX_OUTPUT_BYTES, gt=0, description="Cap on captured stdout+stderr bytes"
    )
    temp_dir: Path | None = Field(default=None, description="Directory for temporary listing artifacts")
    log_level: str = Field(default="INFO", description="Log level")

    @field_validator("executable")
    @classmethod
    def _non_blank_executable(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("executable must not be blank")
        return stripped


def resolve_executable(name: str) -> str:
    """Resolve ``name`` through the PATH search, keeping it as given when not found."""
    return shutil.which(name) or name


def get_settings(**overrides: object) -> Settings:
    """Build settings and pin the editor executable to a resolved location.

    Raises:
        ConfigurationError: If the environment holds invalid values.
    """
    try:
        settings = Settings(**overrides)
    except ValueError as exc:
        raise ConfigurationError(f"invalid configuration: {exc}") from exc
    return settings.model_copy(update={"executable": resolve_executable(settings.executable)})
