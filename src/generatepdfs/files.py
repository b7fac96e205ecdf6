"""Local file helpers for building generation requests."""

from __future__ import annotations

import base64
import mimetypes
import os
from pathlib import Path

import filetype


__all__ = [
    "DEFAULT_MIME_TYPE",
    "detect_mime_type",
    "encode_file",
    "is_readable_file",
]


DEFAULT_MIME_TYPE = "application/octet-stream"

_EXTENSION_MIME_TYPES: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
}


def is_readable_file(path: str | os.PathLike[str]) -> bool:
    """Check that a path points to an existing, readable regular file.

    Args:
        path: Path to check.

    Returns:
        True if the file exists and the current process may read it.
    """
    file_path = Path(path)
    return file_path.is_file() and os.access(file_path, os.R_OK)


def encode_file(path: str | os.PathLike[str]) -> str:
    """Read a file and return its content as a base64 string."""
    return base64.b64encode(Path(path).read_bytes()).decode("ascii")


def detect_mime_type(path: str | os.PathLike[str]) -> str:
    """Detect the MIME type of a file.

    The file content is sniffed first. When its signature is not
    recognised (text formats such as SVG have none) the system MIME
    database is asked about the name, then a small table of image
    extensions. Anything else is reported as ``application/octet-stream``.

    Args:
        path: Path to the file.

    Returns:
        The detected MIME type.
    """
    file_path = Path(path)
    sniffed: str | None = filetype.guess_mime(str(file_path))
    if sniffed is not None:
        return sniffed

    mime_type, _ = mimetypes.guess_type(file_path.name)
    if mime_type is not None:
        return mime_type

    extension = file_path.suffix.lstrip(".").lower()
    return _EXTENSION_MIME_TYPES.get(extension, DEFAULT_MIME_TYPE)
