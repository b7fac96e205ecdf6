"""Configuration-specific exceptions for generatepdfs."""

from __future__ import annotations

from generatepdfs.exceptions import GeneratePDFsError


__all__ = [
    "ConfigurationError",
    "ConfigurationFileNotFoundError",
    "ConfigurationValidationError",
    "MissingApiTokenError",
]


class ConfigurationError(GeneratePDFsError):
    """Base exception for configuration errors."""


class ConfigurationFileNotFoundError(ConfigurationError):
    """Raised when a required configuration file cannot be found.

    Attributes:
        path: The path that was requested (None when searching defaults).
        searched_paths: Paths that were searched.
    """

    def __init__(
        self,
        path: str | None = None,
        searched_paths: list[str] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            path: The specific path requested, or None if searching defaults.
            searched_paths: List of paths that were searched.
        """
        self.path = path
        self.searched_paths = searched_paths or []

        if path:
            message = f"Configuration file not found: {path}"
        elif self.searched_paths:
            message = (
                "Configuration file not found. Searched: "
                + ", ".join(self.searched_paths)
            )
        else:
            message = "Configuration file not found"

        super().__init__(message)


class ConfigurationValidationError(ConfigurationError):
    """Raised when the loaded configuration does not validate.

    Attributes:
        errors: Validation error details from Pydantic, when available.
    """

    def __init__(
        self,
        message: str,
        errors: list[dict[str, object]] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable summary of the validation failure.
            errors: List of validation error details (from Pydantic).
        """
        super().__init__(message)
        self.errors = errors or []


class MissingApiTokenError(ConfigurationError):
    """Raised when no API token can be resolved from any source."""

    def __init__(self) -> None:
        """Initialize the exception."""
        super().__init__(
            "No API token configured. Set api.token, api.token_file "
            "or the GENERATEPDFS_API_TOKEN environment variable."
        )
