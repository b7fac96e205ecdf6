"""Observability module (structured logging)."""

from __future__ import annotations

from generatepdfs.observability.logging import (
    LogFormat,
    LogLevel,
    configure_logging,
    get_logger,
)


__all__ = [
    "LogFormat",
    "LogLevel",
    "configure_logging",
    "get_logger",
]
