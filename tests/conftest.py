"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
import pytest
import structlog

from generatepdfs import GeneratePDFs


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


BASE_URL = "https://api.generatepdfs.com"


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop logging configuration left behind by a test."""
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    # configure_logging installs a basicConfig handler on the root logger
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def api_token() -> str:
    """API token for test clients."""
    return "test-api-token"


@pytest.fixture
def client(api_token: str) -> Generator[GeneratePDFs, None, None]:
    """Client using the default transport (mock it with respx)."""
    with GeneratePDFs.connect(api_token) as c:
        yield c


@pytest.fixture
def offline_client(api_token: str) -> Generator[GeneratePDFs, None, None]:
    """Client whose transport fails the test on any request."""

    def handler(request: httpx.Request) -> httpx.Response:
        pytest.fail(f"Unexpected request: {request.method} {request.url}")

    with GeneratePDFs.connect(api_token, transport=httpx.MockTransport(handler)) as c:
        yield c


@pytest.fixture
def sample_pdf_json() -> dict[str, Any]:
    """Sample PDF object as returned by the API."""
    return {
        "id": 123,
        "name": "test.pdf",
        "status": "pending",
        "download_url": f"{BASE_URL}/pdfs/123/download/token",
        "created_at": "2024-01-01T12:00:00.000000Z",
    }


@pytest.fixture
def completed_pdf_json(sample_pdf_json: dict[str, Any]) -> dict[str, Any]:
    """Sample PDF object for a finished job."""
    return {**sample_pdf_json, "status": "completed"}


@pytest.fixture
def html_file(tmp_path: Path) -> Path:
    """A small HTML document on disk."""
    path = tmp_path / "page.html"
    path.write_text("<html><body>Test</body></html>")
    return path


@pytest.fixture
def css_file(tmp_path: Path) -> Path:
    """A small stylesheet on disk."""
    path = tmp_path / "style.css"
    path.write_text("body { color: red; }")
    return path


@pytest.fixture
def image_file(tmp_path: Path) -> Path:
    """A fake PNG image on disk."""
    path = tmp_path / "logo.png"
    path.write_bytes(b"fake-image-content")
    return path
