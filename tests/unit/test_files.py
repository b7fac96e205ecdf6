"""Unit tests for local file helpers."""

from __future__ import annotations

import base64
import os
from typing import TYPE_CHECKING

import pytest

from generatepdfs.files import (
    DEFAULT_MIME_TYPE,
    detect_mime_type,
    encode_file,
    is_readable_file,
)


if TYPE_CHECKING:
    from pathlib import Path


class TestIsReadableFile:
    """Tests for is_readable_file."""

    def test_existing_file(self, html_file: Path) -> None:
        """Test a regular readable file is accepted."""
        assert is_readable_file(html_file) is True

    def test_string_path(self, html_file: Path) -> None:
        """Test plain string paths are accepted."""
        assert is_readable_file(str(html_file)) is True

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a nonexistent path is rejected."""
        assert is_readable_file(tmp_path / "missing.html") is False

    def test_directory(self, tmp_path: Path) -> None:
        """Test directories are rejected."""
        assert is_readable_file(tmp_path) is False

    @pytest.mark.skipif(
        hasattr(os, "geteuid") and os.geteuid() == 0,
        reason="root can read files regardless of mode",
    )
    def test_unreadable_file(self, html_file: Path) -> None:
        """Test files without read permission are rejected."""
        html_file.chmod(0o000)
        try:
            assert is_readable_file(html_file) is False
        finally:
            html_file.chmod(0o644)


class TestEncodeFile:
    """Tests for encode_file."""

    def test_text_file(self, html_file: Path) -> None:
        """Test text content is base64 encoded."""
        assert encode_file(html_file) == base64.b64encode(
            b"<html><body>Test</body></html>"
        ).decode()

    def test_binary_file(self, tmp_path: Path) -> None:
        """Test arbitrary bytes survive encoding."""
        path = tmp_path / "blob.bin"
        content = bytes(range(256))
        path.write_bytes(content)

        assert base64.b64decode(encode_file(path)) == content

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test an empty file encodes to an empty string."""
        path = tmp_path / "empty.css"
        path.write_bytes(b"")

        assert encode_file(path) == ""


class TestDetectMimeType:
    """Tests for detect_mime_type."""

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("logo.png", "image/png"),
            ("photo.jpg", "image/jpeg"),
            ("photo.jpeg", "image/jpeg"),
            ("PHOTO.JPG", "image/jpeg"),
            ("anim.gif", "image/gif"),
            ("icon.svg", "image/svg+xml"),
        ],
    )
    def test_image_types(self, tmp_path: Path, filename: str, expected: str) -> None:
        """Test common image extensions."""
        path = tmp_path / filename
        path.write_bytes(b"data")

        assert detect_mime_type(path) == expected

    def test_webp(self, tmp_path: Path) -> None:
        """Test webp is recognised even without a system MIME entry."""
        path = tmp_path / "picture.webp"
        path.write_bytes(b"data")

        assert detect_mime_type(path) == "image/webp"

    @pytest.mark.parametrize("filename", ["data.qzx", "README"])
    def test_unknown_falls_back(self, tmp_path: Path, filename: str) -> None:
        """Test unknown files are reported as octet-stream."""
        path = tmp_path / filename
        path.write_bytes(b"data")

        assert detect_mime_type(path) == DEFAULT_MIME_TYPE
        assert DEFAULT_MIME_TYPE == "application/octet-stream"

    def test_content_beats_extension(self, tmp_path: Path) -> None:
        """Test a PNG signature is recognised under an unknown extension."""
        path = tmp_path / "logo.bin"
        path.write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 32)

        assert detect_mime_type(path) == "image/png"

    def test_jpeg_content_without_extension(self, tmp_path: Path) -> None:
        """Test a JPEG signature is recognised on a bare file name."""
        path = tmp_path / "photo"
        path.write_bytes(b"\xff\xd8\xff\xe0" + b"\x00" * 32)

        assert detect_mime_type(path) == "image/jpeg"
