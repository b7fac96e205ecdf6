"""Pydantic models for GeneratePDFs requests and responses."""

from __future__ import annotations

import contextlib
import os
from collections.abc import Mapping
from datetime import UTC, datetime, tzinfo
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Self, TypedDict

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    TypeAdapter,
    ValidationError,
)

from generatepdfs.exceptions import (
    GeneratePDFsError,
    InvalidInputError,
    PdfNotReadyError,
    PdfWriteError,
)


if TYPE_CHECKING:
    from generatepdfs.client import GeneratePDFs


__all__ = [
    "EncodedImage",
    "GenerateFromHtmlRequest",
    "GenerateFromUrlRequest",
    "ImageFile",
    "Pdf",
    "PdfStatus",
    "parse_created_at",
]


class PdfStatus(StrEnum):
    """Known generation job states.

    The API may introduce new states; :attr:`Pdf.status` keeps whatever
    string the server sent.
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class ImageFile(TypedDict, total=False):
    """An image to embed alongside the HTML source."""

    name: str
    path: str | os.PathLike[str]
    mime_type: str


class GeneratePDFsBaseModel(BaseModel):
    """Base model with common configuration for all API models."""

    model_config = ConfigDict(
        extra="ignore",  # Ignore unknown fields from API
    )


# ---------------------------------------------------------------------------
# Request Bodies
# ---------------------------------------------------------------------------


class EncodedImage(GeneratePDFsBaseModel):
    """An image file encoded for transport."""

    name: str
    content: str  # base64
    mime_type: str


class GenerateFromHtmlRequest(GeneratePDFsBaseModel):
    """Body for ``POST /pdfs/generate`` from local HTML.

    Only non-None fields are included in the request body.
    """

    html: str  # base64
    css: str | None = None  # base64
    images: list[EncodedImage] | None = None


class GenerateFromUrlRequest(GeneratePDFsBaseModel):
    """Body for ``POST /pdfs/generate`` from a remote page."""

    url: str


# ---------------------------------------------------------------------------
# Timestamp Parsing
# ---------------------------------------------------------------------------

# Strict layouts tried before the general parser, with the zone assumed
# when the layout has no offset of its own.
_STRICT_LAYOUTS: tuple[tuple[str, tzinfo | None], ...] = (
    ("%Y-%m-%dT%H:%M:%S%z", None),
    ("%Y-%m-%dT%H:%M:%S.%fZ", UTC),
)

_datetime_adapter = TypeAdapter(datetime)


def parse_created_at(raw: object) -> datetime:
    """Parse a ``created_at`` value from the API.

    Tries strict ISO 8601 with an offset, then ISO 8601 with fractional
    seconds and a literal ``Z``, then pydantic's general datetime parsing.

    Args:
        raw: The value sent by the server.

    Returns:
        The parsed timestamp.

    Raises:
        InvalidInputError: If no strategy can parse the value.
    """
    value = str(raw)

    for layout, tz in _STRICT_LAYOUTS:
        with contextlib.suppress(ValueError):
            parsed = datetime.strptime(value, layout)  # noqa: DTZ007
            return parsed if tz is None else parsed.replace(tzinfo=tz)

    try:
        return _datetime_adapter.validate_python(value)
    except ValidationError as exc:
        msg = f"Invalid created_at format: {value}"
        raise InvalidInputError(msg) from exc


# ---------------------------------------------------------------------------
# Pdf
# ---------------------------------------------------------------------------

_REQUIRED_FIELDS = ("id", "name", "status", "download_url", "created_at")


class Pdf(GeneratePDFsBaseModel):
    """A snapshot of one PDF generation job.

    Instances are built from API responses with :meth:`from_remote` and are
    never modified afterwards. :meth:`refresh` fetches a new snapshot rather
    than updating this one.

    Example:
        ```python
        pdf = client.generate_from_url("https://example.com")
        pdf = pdf.refresh()
        if pdf.is_ready():
            pdf.download_to_file("example.pdf")
        ```
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    id: int = Field(ge=1)
    name: str = Field(min_length=1)
    status: str = Field(min_length=1)
    download_url: str = Field(min_length=1)
    created_at: datetime

    _client: GeneratePDFs | None = PrivateAttr(default=None)

    @classmethod
    def from_remote(cls, data: Mapping[str, Any], client: GeneratePDFs) -> Self:
        """Build a Pdf from the ``pdf``/``data`` object of an API response.

        Args:
            data: The decoded PDF object.
            client: The client that fetched it, used for follow-up calls.

        Returns:
            A fully validated Pdf bound to ``client``.

        Raises:
            InvalidInputError: If a required field is missing or malformed,
                or ``created_at`` cannot be parsed.
        """
        if not isinstance(data, Mapping) or any(
            data.get(key) is None for key in _REQUIRED_FIELDS
        ):
            msg = "Invalid PDF data structure"
            raise InvalidInputError(msg)

        created_at = parse_created_at(data["created_at"])

        try:
            pdf = cls.model_validate({**data, "created_at": created_at})
        except ValidationError as exc:
            msg = "Invalid PDF data structure"
            raise InvalidInputError(msg) from exc

        pdf._client = client  # noqa: SLF001
        return pdf

    @property
    def client(self) -> GeneratePDFs:
        """The client this PDF was fetched with."""
        if self._client is None:
            msg = "PDF is not bound to a client"
            raise GeneratePDFsError(msg)
        return self._client

    def is_ready(self) -> bool:
        """Check whether the PDF can be downloaded."""
        return self.status == PdfStatus.COMPLETED

    def download(self) -> bytes:
        """Download the PDF content.

        Returns:
            The raw PDF bytes.

        Raises:
            PdfNotReadyError: If the job has not completed.
        """
        if not self.is_ready():
            raise PdfNotReadyError(self.status)
        return self.client.download_pdf(self.download_url)

    def download_to_file(self, path: str | os.PathLike[str]) -> bool:
        """Download the PDF and save it to a file.

        Args:
            path: Destination file path.

        Returns:
            True once the whole file has been written.

        Raises:
            PdfNotReadyError: If the job has not completed.
            PdfWriteError: If the file cannot be written.
        """
        content = self.download()

        try:
            Path(path).write_bytes(content)
        except OSError as exc:
            raise PdfWriteError(os.fspath(path), cause=exc) from exc

        return True

    def refresh(self) -> Pdf:
        """Fetch the current state of this job as a new Pdf."""
        return self.client.get_pdf(self.id)
