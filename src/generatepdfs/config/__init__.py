"""Configuration module for generatepdfs.

Settings come from a YAML file and ``GENERATEPDFS_*`` environment
variables. YAML values support ${VAR} and ${VAR:-default} interpolation.

Example:
    >>> from generatepdfs.config import load_settings
    >>> settings = load_settings("generatepdfs.yaml")
    >>> settings.observability.logging.level
    <LogLevel.WARNING: 'warning'>
    >>> token = settings.require_api_token()
"""

from __future__ import annotations

from generatepdfs.config.exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
    MissingApiTokenError,
)
from generatepdfs.config.schema import (
    ApiConfig,
    ConfigBaseModel,
    LoggingConfig,
    ObservabilityConfig,
)
from generatepdfs.config.settings import (
    TOKEN_ENV_VAR,
    Settings,
    clear_settings_cache,
    find_config_file,
    get_settings,
    load_settings,
)


__all__ = [
    "TOKEN_ENV_VAR",
    "ApiConfig",
    "ConfigBaseModel",
    "ConfigurationError",
    "ConfigurationFileNotFoundError",
    "ConfigurationValidationError",
    "LoggingConfig",
    "MissingApiTokenError",
    "ObservabilityConfig",
    "Settings",
    "clear_settings_cache",
    "find_config_file",
    "get_settings",
    "load_settings",
]
