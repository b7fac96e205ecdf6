"""Configuration schema models for generatepdfs.

These models describe the sections of the settings file and are validated
by the :class:`~generatepdfs.config.settings.Settings` class.
"""

from __future__ import annotations

from pathlib import Path  # noqa: TC003 - needed at runtime for Pydantic

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from generatepdfs.observability import LogFormat, LogLevel


__all__ = [
    "ApiConfig",
    "ConfigBaseModel",
    "LoggingConfig",
    "ObservabilityConfig",
]


class ConfigBaseModel(BaseModel):
    """Base model for all configuration sections.

    Unknown keys are rejected so that typos in the settings file surface
    as validation errors.
    """

    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
        validate_default=True,
    )


class ApiConfig(ConfigBaseModel):
    """API credential configuration.

    If both `token` and `token_file` are set, `token` takes precedence.
    The endpoint itself is fixed and cannot be configured.

    Attributes:
        token: API token (supports ${VAR} interpolation in YAML).
        token_file: Path to a file containing the API token.
    """

    token: SecretStr | None = Field(
        default=None,
        description="API token (supports ${VAR} interpolation)",
    )
    token_file: Path | None = Field(
        default=None,
        description="Path to file containing the API token",
    )

    @field_validator("token", mode="before")
    @classmethod
    def empty_token_is_unset(cls, v: object) -> object:
        """Treat an empty string (e.g. an unset ${VAR}) as no token."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class LoggingConfig(ConfigBaseModel):
    """Logging configuration.

    Attributes:
        level: Log verbosity level.
        format: Log output format (auto, console, logfmt or json).
    """

    level: LogLevel = Field(default=LogLevel.WARNING)
    format: LogFormat = Field(default=LogFormat.AUTO)

    @field_validator("level", "format", mode="before")
    @classmethod
    def lowercase(cls, v: object) -> object:
        """Accept upper-case names such as ``INFO``."""
        return v.lower() if isinstance(v, str) else v


class ObservabilityConfig(ConfigBaseModel):
    """Observability configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
