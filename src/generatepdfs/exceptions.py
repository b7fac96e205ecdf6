"""Custom exceptions for the GeneratePDFs client.

Transport-level failures (connection errors, timeouts, non-2xx responses)
are not wrapped: they surface as :class:`httpx.HTTPError` subclasses, which
this module re-exports as ``HTTPTransportError`` for convenience.
"""

from __future__ import annotations

import httpx


__all__ = [
    "GeneratePDFsError",
    "HTTPTransportError",
    "InvalidInputError",
    "PdfNotReadyError",
    "PdfWriteError",
]


HTTPTransportError = httpx.HTTPError


class GeneratePDFsError(Exception):
    """Base exception for all GeneratePDFs client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
        self.message = message


class InvalidInputError(GeneratePDFsError, ValueError):
    """Raised when local input or an API response fails validation.

    Covers bad file paths, malformed URLs and non-positive ids detected
    before any request is sent, as well as responses that lack the fields
    the client needs.
    """


class PdfNotReadyError(GeneratePDFsError):
    """Raised when an action needs a completed PDF.

    Attributes:
        status: The status the PDF had when the action was attempted.
    """

    def __init__(self, status: str) -> None:
        """Initialize the not-ready error.

        Args:
            status: Current status of the PDF.
        """
        super().__init__(f"PDF is not ready yet. Current status: {status}")
        self.status = status


class PdfWriteError(GeneratePDFsError):
    """Raised when downloaded PDF content cannot be written to disk.

    Attributes:
        path: Destination path that could not be written.
    """

    def __init__(self, path: str, *, cause: OSError | None = None) -> None:
        """Initialize the write error.

        Args:
            path: Destination path that could not be written.
            cause: The underlying filesystem error.
        """
        super().__init__(f"Failed to write PDF to file: {path}")
        self.path = path
        self.__cause__ = cause
