"""Structured logging configuration for generatepdfs.

The SDK itself only emits events through structlog loggers; nothing is
configured on import. Applications (and the ``generatepdfs`` CLI) call
:func:`configure_logging` once at startup. It supports:
- Configurable log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
- Colorized console output for development (TTY detection)
- Logfmt or JSON output for machines
- ISO 8601 timestamps in UTC
"""

from __future__ import annotations

import logging
import sys
from enum import StrEnum
from typing import TYPE_CHECKING

import structlog
from structlog.contextvars import merge_contextvars
from structlog.processors import TimeStamper, add_log_level


if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = [
    "LogFormat",
    "LogLevel",
    "configure_logging",
    "get_logger",
]


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    def to_stdlib_level(self) -> int:
        """Convert to stdlib logging level.

        Returns:
            The corresponding logging module level constant.
        """
        level: int = getattr(logging, self.name)
        return level


class LogFormat(StrEnum):
    """Log output format.

    Attributes:
        AUTO: Console output on a TTY, logfmt otherwise.
        CONSOLE: Human-readable console output.
        LOGFMT: key=value lines.
        JSON: One JSON object per line.
    """

    AUTO = "auto"
    CONSOLE = "console"
    LOGFMT = "logfmt"
    JSON = "json"


def _stderr_is_tty() -> bool:
    return (
        sys.stderr is not None
        and hasattr(sys.stderr, "isatty")
        and sys.stderr.isatty()
    )


def _create_renderer(
    log_format: LogFormat,
    *,
    colors: bool = True,
    key_order: Sequence[str] | None = None,
) -> structlog.typing.Processor:
    """Create the final renderer for the processor chain.

    Args:
        log_format: Requested output format. ``AUTO`` must already be
            resolved to a concrete format.
        colors: Whether console output is colorized.
        key_order: Order of keys in logfmt output.

    Returns:
        Configured renderer processor.
    """
    if log_format is LogFormat.JSON:
        return structlog.processors.JSONRenderer(sort_keys=False)
    if log_format is LogFormat.CONSOLE:
        return structlog.dev.ConsoleRenderer(
            colors=colors,
            exception_formatter=structlog.dev.plain_traceback,
        )
    default_key_order = ["timestamp", "level", "event"]
    order = list(key_order) if key_order else default_key_order
    return structlog.processors.LogfmtRenderer(
        key_order=order,
        drop_missing=True,
        bool_as_flag=False,  # Use explicit true/false for machines
    )


# Used while structlog is unconfigured. The stdlib logger decides the level.
_STDLIB_PROCESSORS: list[structlog.typing.Processor] = [
    structlog.stdlib.filter_by_level,
    merge_contextvars,
    structlog.processors.LogfmtRenderer(key_order=["event"], bool_as_flag=False),
]


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    *,
    log_format: LogFormat | str = LogFormat.AUTO,
    force_colors: bool | None = None,
) -> None:
    """Configure structured logging.

    Args:
        level: Minimum log level. Can be a LogLevel enum or string
            ('debug', 'info', 'warning', 'error', 'critical').
        log_format: Output format. ``auto`` picks the console renderer
            when stderr is a TTY and logfmt otherwise.
        force_colors: Force color output on/off. If None, auto-detect from
            TTY. With ``auto`` format, forcing colors off also selects
            logfmt.

    Example:
        >>> from generatepdfs.observability import configure_logging
        >>> configure_logging(level="debug", log_format="json")
    """
    if isinstance(level, str):
        level = LogLevel(level.lower())
    if isinstance(log_format, str):
        log_format = LogFormat(log_format.lower())

    use_colors = force_colors if force_colors is not None else _stderr_is_tty()

    if log_format is LogFormat.AUTO:
        log_format = LogFormat.CONSOLE if use_colors else LogFormat.LOGFMT

    # Order matters! Each processor transforms the event dict for the next.
    processors: list[structlog.typing.Processor] = [
        merge_contextvars,
        add_log_level,
        TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]
    if log_format is LogFormat.JSON:
        processors.append(structlog.processors.format_exc_info)
    processors.append(_create_renderer(log_format, colors=use_colors))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level.to_stdlib_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # Also configure stdlib logging for libraries that use it (httpx)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level.to_stdlib_level(),
        force=True,
    )


def get_logger(
    name: str | None = None,
    **initial_context: object,
) -> structlog.BoundLogger:
    """Get a structured logger instance.

    Until :func:`configure_logging` has been called, events go to the
    stdlib logger of the same name as one logfmt line each. The
    ``generatepdfs`` logger carries a ``NullHandler``, so an application
    that sets up neither structlog nor stdlib logging sees no output.

    Args:
        name: Logger name, typically __name__ of the calling module.
        **initial_context: Initial key-value pairs to bind to the logger.

    Returns:
        A bound structlog logger.

    Example:
        >>> logger = get_logger(__name__, component="client")
        >>> logger.info("pdf_generated", pdf_id=123)
    """
    log: structlog.BoundLogger
    if structlog.is_configured():
        log = structlog.get_logger(name)
    else:
        log = structlog.wrap_logger(
            logging.getLogger(name or "generatepdfs"),
            processors=_STDLIB_PROCESSORS,
            wrapper_class=structlog.stdlib.BoundLogger,
        )
    if initial_context:
        log = log.bind(**initial_context)
    return log
