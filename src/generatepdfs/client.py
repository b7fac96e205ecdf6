"""HTTP client for the GeneratePDFs API."""

from __future__ import annotations

import os
import time
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Self

import httpx
from pydantic import AnyUrl, TypeAdapter, ValidationError

from generatepdfs.exceptions import InvalidInputError
from generatepdfs.files import detect_mime_type, encode_file, is_readable_file
from generatepdfs.models import (
    EncodedImage,
    GenerateFromHtmlRequest,
    GenerateFromUrlRequest,
    Pdf,
)
from generatepdfs.observability import get_logger


if TYPE_CHECKING:
    import structlog

    from generatepdfs.models import ImageFile


__all__ = ["GeneratePDFs"]


_url_adapter = TypeAdapter(AnyUrl)


def _is_absolute_url(url: object) -> bool:
    """Check that a value is a well-formed URL with a scheme and host."""
    if not isinstance(url, str):
        return False
    try:
        parsed = _url_adapter.validate_python(url)
    except ValidationError:
        return False
    return bool(parsed.host)


class GeneratePDFs:
    """Client for the GeneratePDFs HTML/URL to PDF API.

    Every call is synchronous and sent exactly once. Connection errors,
    timeouts and non-2xx responses are raised as the original
    :class:`httpx.HTTPError` subclasses.

    Example:
        ```python
        with GeneratePDFs.connect("your-api-token") as client:
            pdf = client.generate_from_html(
                "invoice.html",
                css_path="invoice.css",
                images=[{"name": "logo.png", "path": "logo.png"}],
            )
            print(pdf.id, pdf.status)
        ```

    Attributes:
        BASE_URL: The API endpoint all relative paths are resolved against.
        DEFAULT_TIMEOUT: Timeout applied to every request.
    """

    BASE_URL = "https://api.generatepdfs.com"
    DEFAULT_TIMEOUT = httpx.Timeout(30.0)

    def __init__(
        self,
        api_token: str,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client. No network I/O happens here.

        Args:
            api_token: API token sent as a bearer credential.
            transport: Optional custom transport for testing or advanced config.
        """
        self._api_token = api_token
        self._transport = transport
        self._client: httpx.Client | None = None

    @classmethod
    def connect(
        cls,
        api_token: str,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> Self:
        """Create a new client for the given API token.

        Args:
            api_token: API token sent as a bearer credential.
            transport: Optional custom transport for testing or advanced config.

        Returns:
            A new client.
        """
        return cls(api_token, transport=transport)

    @property
    def api_token(self) -> str:
        """The API token this client authenticates with."""
        return self._api_token

    @property
    def _logger(self) -> structlog.BoundLogger:
        """Logger resolved on use, so configuring logging later still applies."""
        return get_logger(__name__)

    @property
    def _headers(self) -> dict[str, str]:
        """Default headers for API requests."""
        return {"Authorization": f"Bearer {self._api_token}"}

    def __enter__(self) -> Self:
        """Enter context and create HTTP client."""
        self._ensure_client()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit context and close HTTP client."""
        self.close()

    def _ensure_client(self) -> httpx.Client:
        """Ensure the HTTP client is initialized."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                base_url=self.BASE_URL,
                headers=self._headers,
                timeout=self.DEFAULT_TIMEOUT,
                transport=self._transport,
                follow_redirects=True,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def _request(
        self,
        method: str,
        url: str,
        *,
        json: Any | None = None,  # noqa: ANN401
    ) -> httpx.Response:
        """Send a single HTTP request.

        Args:
            method: HTTP method (GET, POST).
            url: API path relative to :attr:`BASE_URL`, or an absolute URL.
            json: JSON body data.

        Returns:
            The successful HTTP response.

        Raises:
            httpx.HTTPStatusError: For non-2xx responses.
            httpx.TransportError: For connection failures and timeouts.
        """
        client = self._ensure_client()
        log = self._logger.bind(method=method, url=url)

        headers = dict(self._headers)
        if json is not None:
            headers["Content-Type"] = "application/json"

        log.debug("api_request")
        start = time.perf_counter()
        response = client.request(method, url, json=json, headers=headers)
        log.debug(
            "api_response",
            status_code=response.status_code,
            elapsed_ms=round((time.perf_counter() - start) * 1000, 2),
        )

        response.raise_for_status()
        return response

    def _request_json(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,  # noqa: ANN401
    ) -> dict[str, Any]:
        """Send a request and decode a JSON object from the response.

        A body that is not a JSON object decodes to an empty dict, so the
        caller reports which envelope key is missing.
        """
        response = self._request(method, path, json=json)
        try:
            payload = response.json()
        except ValueError:
            self._logger.warning(
                "invalid_json_response",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            return {}
        return payload if isinstance(payload, dict) else {}

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate_from_html(
        self,
        html_path: str | os.PathLike[str],
        css_path: str | os.PathLike[str] | None = None,
        images: Iterable[ImageFile | Mapping[str, Any]] | None = None,
    ) -> Pdf:
        """Generate a PDF from a local HTML file.

        Args:
            html_path: Path to the HTML file.
            css_path: Optional path to a CSS file.
            images: Optional images referenced by the HTML. Each entry is a
                mapping with ``name``, ``path`` and optionally ``mime_type``.
                Entries without a name or path, or whose file cannot be
                read, are left out of the request.

        Returns:
            The newly created PDF job.

        Raises:
            InvalidInputError: If the HTML or CSS file cannot be read, or
                the response has no ``pdf`` object.
        """
        if not is_readable_file(html_path):
            msg = f"HTML file not found or not readable: {html_path}"
            raise InvalidInputError(msg)

        if css_path is not None and not is_readable_file(css_path):
            msg = f"CSS file not found or not readable: {css_path}"
            raise InvalidInputError(msg)

        image_list = list(images) if images else []

        request = GenerateFromHtmlRequest(
            html=encode_file(html_path),
            css=encode_file(css_path) if css_path is not None else None,
            images=self._encode_images(image_list) if image_list else None,
        )

        self._logger.info(
            "generating_pdf",
            source="html",
            html_path=os.fspath(html_path),
            has_css=request.css is not None,
            image_count=len(request.images or []),
        )
        return self._generate(request)

    def generate_from_url(self, url: str) -> Pdf:
        """Generate a PDF from a web page.

        Args:
            url: Absolute URL of the page to convert.

        Returns:
            The newly created PDF job.

        Raises:
            InvalidInputError: If ``url`` is not a well-formed absolute URL,
                or the response has no ``pdf`` object.
        """
        if not _is_absolute_url(url):
            msg = f"Invalid URL: {url}"
            raise InvalidInputError(msg)

        self._logger.info("generating_pdf", source="url", url=url)
        return self._generate(GenerateFromUrlRequest(url=url))

    def _generate(
        self,
        request: GenerateFromHtmlRequest | GenerateFromUrlRequest,
    ) -> Pdf:
        """Submit a generation request and decode the ``pdf`` envelope."""
        payload = self._request_json(
            "POST",
            "/pdfs/generate",
            json=request.model_dump(exclude_none=True),
        )

        pdf_data = payload.get("pdf")
        if not isinstance(pdf_data, Mapping):
            msg = "Invalid API response: missing pdf data"
            raise InvalidInputError(msg)

        pdf = Pdf.from_remote(pdf_data, self)
        self._logger.info("pdf_job_created", pdf_id=pdf.id, status=pdf.status)
        return pdf

    def _encode_images(
        self,
        images: Iterable[ImageFile | Mapping[str, Any]],
    ) -> list[EncodedImage]:
        """Encode image files for the request body, skipping unusable entries."""
        encoded: list[EncodedImage] = []

        for index, image in enumerate(images):
            if not isinstance(image, Mapping):
                self._logger.warning(
                    "image_skipped",
                    index=index,
                    reason="not_a_mapping",
                )
                continue

            name = image.get("name")
            path = image.get("path")
            if name is None or path is None:
                self._logger.warning(
                    "image_skipped",
                    index=index,
                    reason="missing_name_or_path",
                )
                continue

            if not is_readable_file(path):
                self._logger.warning(
                    "image_skipped",
                    index=index,
                    reason="not_readable",
                    path=os.fspath(path),
                )
                continue

            mime_type = image.get("mime_type")
            if mime_type is None:
                mime_type = detect_mime_type(path)

            encoded.append(
                EncodedImage(
                    name=str(name),
                    content=encode_file(path),
                    mime_type=str(mime_type),
                )
            )

        return encoded

    # -------------------------------------------------------------------------
    # Retrieval
    # -------------------------------------------------------------------------

    def get_pdf(self, pdf_id: int) -> Pdf:
        """Get the current state of a PDF job.

        Args:
            pdf_id: The PDF ID.

        Returns:
            A new snapshot of the job.

        Raises:
            InvalidInputError: If ``pdf_id`` is not positive, or the
                response has no ``data`` object.
        """
        if pdf_id < 1:
            msg = f"Invalid PDF ID: {pdf_id}"
            raise InvalidInputError(msg)

        payload = self._request_json("GET", f"/pdfs/{pdf_id}")

        data = payload.get("data")
        if not isinstance(data, Mapping):
            msg = "Invalid API response: missing data"
            raise InvalidInputError(msg)

        return Pdf.from_remote(data, self)

    def download_pdf(self, download_url: str) -> bytes:
        """Download PDF content.

        Args:
            download_url: Absolute download URL of a completed PDF.

        Returns:
            The response body, unmodified.
        """
        response = self._request("GET", download_url)
        self._logger.debug("pdf_downloaded", size=len(response.content))
        return response.content
