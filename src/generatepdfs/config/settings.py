"""Settings management for generatepdfs.

Settings are read from an optional YAML file and environment variables.
They are only needed by tools built on the SDK (such as the command line
interface); :class:`~generatepdfs.client.GeneratePDFs` itself takes its
token directly.

Example:
    >>> from generatepdfs.config import load_settings
    >>> settings = load_settings()
    >>> client = GeneratePDFs.connect(settings.require_api_token())
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import Field, SecretStr, ValidationError, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from generatepdfs.config.exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
    MissingApiTokenError,
)
from generatepdfs.config.schema import ApiConfig, ObservabilityConfig


if TYPE_CHECKING:
    from collections.abc import Sequence


__all__ = [
    "TOKEN_ENV_VAR",
    "Settings",
    "clear_settings_cache",
    "find_config_file",
    "get_settings",
    "load_settings",
]


TOKEN_ENV_VAR = "GENERATEPDFS_API_TOKEN"

# ${VAR} and ${VAR:-default}
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _interpolate_env_vars(value: object) -> object:
    """Recursively replace ${VAR} and ${VAR:-default} in strings.

    Unset variables without a default become empty strings. Dicts and
    lists are walked; other values are returned unchanged.

    Example:
        >>> os.environ["MY_TOKEN"] = "secret123"
        >>> _interpolate_env_vars({"token": "${MY_TOKEN}"})
        {'token': 'secret123'}
    """
    if isinstance(value, dict):
        return {key: _interpolate_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_interpolate_env_vars(item) for item in value]
    if not isinstance(value, str):
        return value

    def replace(match: re.Match[str]) -> str:
        name, default = match.group(1), match.group(2)
        return os.environ.get(name, default if default is not None else "")

    return _ENV_VAR_PATTERN.sub(replace, value)


class _InterpolatingYamlConfigSettingsSource(YamlConfigSettingsSource):
    """YAML settings source that expands environment variables in values."""

    def _read_files(
        self,
        files: Path | str | Sequence[Path | str] | None,
        **kwargs: Any,  # noqa: ANN401
    ) -> dict[str, Any]:
        interpolated = _interpolate_env_vars(super()._read_files(files, **kwargs))
        if not isinstance(interpolated, dict):  # pragma: no cover
            return {}
        return interpolated


class Settings(BaseSettings):
    """Settings loaded from a YAML file and environment variables.

    Priority order (highest to lowest):
    1. Constructor arguments
    2. Environment variables (``GENERATEPDFS_*``, nested with ``__``,
       e.g. ``GENERATEPDFS_OBSERVABILITY__LOGGING__LEVEL=debug``)
    3. YAML configuration file
    4. Default values

    Attributes:
        api: API credential settings.
        observability: Logging settings.
    """

    model_config = SettingsConfigDict(
        yaml_file=None,  # Set per load via _yaml_file_override
        yaml_file_encoding="utf-8",
        env_prefix="GENERATEPDFS_",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    CONFIG_SEARCH_PATHS: ClassVar[list[Path]] = [
        Path("generatepdfs.yaml"),
        Path("generatepdfs.yml"),
        Path.home() / ".config" / "generatepdfs" / "config.yaml",
    ]

    _yaml_file_override: ClassVar[Path | str | None] = None

    api: ApiConfig = Field(default_factory=ApiConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @model_validator(mode="after")
    def resolve_api_token(self) -> Settings:
        """Resolve the API token.

        Resolution order:
        1. ``api.token``
        2. Contents of ``api.token_file``
        3. The ``GENERATEPDFS_API_TOKEN`` environment variable

        Raises:
            ValueError: If token_file is set but does not exist.
        """
        if self.api.token is not None:
            return self

        if self.api.token_file is not None:
            if not self.api.token_file.is_file():
                msg = f"Token file not found: {self.api.token_file}"
                raise ValueError(msg)
            self.api.token = SecretStr(self.api.token_file.read_text().strip())
            return self

        env_token = os.environ.get(TOKEN_ENV_VAR)
        if env_token:
            self.api.token = SecretStr(env_token)

        return self

    def require_api_token(self) -> str:
        """Return the resolved API token.

        Raises:
            MissingApiTokenError: If no source provided a token.
        """
        if self.api.token is None or not self.api.token.get_secret_value():
            raise MissingApiTokenError
        return self.api.token.get_secret_value()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Use init, env, interpolated YAML, then file secrets (no dotenv)."""
        yaml_source = (
            _InterpolatingYamlConfigSettingsSource(
                settings_cls, yaml_file=cls._yaml_file_override
            )
            if cls._yaml_file_override is not None
            else _InterpolatingYamlConfigSettingsSource(settings_cls)
        )
        return (init_settings, env_settings, yaml_source, file_secret_settings)


# ---------------------------------------------------------------------------
# Settings Loading Functions
# ---------------------------------------------------------------------------

_cached_settings: Settings | None = None


def find_config_file(config_path: Path | str | None = None) -> Path | None:
    """Find the configuration file.

    Args:
        config_path: Explicit path to config file, or None to search
            default locations.

    Returns:
        Path to config file if found, None otherwise.
    """
    if config_path is not None:
        path = Path(config_path)
        return path if path.is_file() else None

    for search_path in Settings.CONFIG_SEARCH_PATHS:
        if search_path.is_file():
            return search_path

    return None


def load_settings(
    config_path: Path | str | None = None,
    *,
    require_config_file: bool = False,
) -> Settings:
    """Load and validate settings, caching them for :func:`get_settings`.

    Args:
        config_path: Path to a YAML config file. If None, searches
            ./generatepdfs.yaml, ./generatepdfs.yml and
            ~/.config/generatepdfs/config.yaml.
        require_config_file: Raise when no config file is found instead of
            falling back to environment variables and defaults. An explicit
            ``config_path`` that does not exist always raises.

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationFileNotFoundError: When the file cannot be found.
        ConfigurationValidationError: When validation fails.
    """
    global _cached_settings  # noqa: PLW0603

    config_file = find_config_file(config_path)

    if config_file is None and (require_config_file or config_path is not None):
        raise ConfigurationFileNotFoundError(
            path=str(config_path) if config_path else None,
            searched_paths=[str(p) for p in Settings.CONFIG_SEARCH_PATHS],
        )

    Settings._yaml_file_override = config_file  # noqa: SLF001
    try:
        settings = Settings()
    except ConfigurationError:
        raise
    except ValidationError as exc:
        msg = f"Failed to load configuration: {exc}"
        raise ConfigurationValidationError(
            msg,
            errors=[dict(error) for error in exc.errors()],
        ) from exc
    except Exception as exc:
        msg = f"Failed to load configuration: {exc}"
        raise ConfigurationValidationError(msg) from exc
    finally:
        Settings._yaml_file_override = None  # noqa: SLF001

    _cached_settings = settings
    return settings


def get_settings() -> Settings:
    """Get the cached settings instance, loading if necessary."""
    global _cached_settings  # noqa: PLW0603

    if _cached_settings is None:
        _cached_settings = load_settings()

    return _cached_settings


def clear_settings_cache() -> None:
    """Clear the cached settings instance (mainly for tests)."""
    global _cached_settings  # noqa: PLW0603
    _cached_settings = None
