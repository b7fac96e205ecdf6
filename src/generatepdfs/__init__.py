"""Python client for the GeneratePDFs HTML/URL to PDF API.

Example:
    ```python
    from generatepdfs import GeneratePDFs

    client = GeneratePDFs.connect("your-api-token")

    pdf = client.generate_from_html(
        "report.html",
        css_path="report.css",
        images=[{"name": "chart.png", "path": "build/chart.png"}],
    )

    # Later, once the server has rendered it
    pdf = pdf.refresh()
    if pdf.is_ready():
        pdf.download_to_file("report.pdf")
    ```
"""

from __future__ import annotations

import logging

from generatepdfs.client import GeneratePDFs
from generatepdfs.exceptions import (
    GeneratePDFsError,
    HTTPTransportError,
    InvalidInputError,
    PdfNotReadyError,
    PdfWriteError,
)
from generatepdfs.models import (
    EncodedImage,
    GenerateFromHtmlRequest,
    GenerateFromUrlRequest,
    ImageFile,
    Pdf,
    PdfStatus,
)


__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "EncodedImage",
    "GenerateFromHtmlRequest",
    "GenerateFromUrlRequest",
    "GeneratePDFs",
    "GeneratePDFsError",
    "HTTPTransportError",
    "ImageFile",
    "InvalidInputError",
    "Pdf",
    "PdfNotReadyError",
    "PdfStatus",
    "PdfWriteError",
    "__version__",
]
