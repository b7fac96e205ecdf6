"""CLI module for generatepdfs."""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
from pathlib import Path  # noqa: TC003 - needed at runtime for typer
from typing import TYPE_CHECKING

import httpx
import typer

from generatepdfs import __version__
from generatepdfs.client import GeneratePDFs
from generatepdfs.config import ConfigurationError, Settings, load_settings
from generatepdfs.exceptions import GeneratePDFsError
from generatepdfs.observability import LogLevel, configure_logging


if TYPE_CHECKING:
    from collections.abc import Iterator

    from generatepdfs.models import ImageFile, Pdf


app = typer.Typer(
    name="generatepdfs",
    help="Convert HTML files and web pages to PDF with the GeneratePDFs API.",
    no_args_is_help=True,
)


@dataclass
class _State:
    """Options shared by all commands."""

    config_file: str | None = None
    level: LogLevel | None = None


def version_callback(value: bool) -> None:  # noqa: FBT001
    """Print version and exit."""
    if value:
        typer.echo(f"generatepdfs version {__version__}")
        raise typer.Exit


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(  # noqa: FBT001
        False,  # noqa: FBT003
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(  # noqa: FBT001
        False,  # noqa: FBT003
        "--verbose",
        "-V",
        help="Enable verbose (debug) logging.",
    ),
    quiet: bool = typer.Option(  # noqa: FBT001
        False,  # noqa: FBT003
        "--quiet",
        "-q",
        help="Only show errors.",
    ),
    config_file: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file.",
    ),
) -> None:
    """generatepdfs CLI."""
    del version  # Handled by callback

    if verbose and quiet:
        typer.echo("Error: --verbose and --quiet are mutually exclusive.", err=True)
        raise typer.Exit(1)

    level: LogLevel | None = None
    if verbose:
        level = LogLevel.DEBUG
    elif quiet:
        level = LogLevel.ERROR

    ctx.obj = _State(config_file=config_file, level=level)


@contextlib.contextmanager
def _handle_errors() -> Iterator[None]:
    """Report SDK and HTTP failures on stderr and exit non-zero."""
    try:
        yield
    except ConfigurationError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(2) from exc
    except (GeneratePDFsError, httpx.HTTPError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc


def _load(ctx: typer.Context) -> Settings:
    """Load settings and configure logging for a command."""
    state: _State = ctx.obj or _State()
    settings = load_settings(state.config_file)
    log_config = settings.observability.logging
    configure_logging(
        level=state.level or log_config.level,
        log_format=log_config.format,
    )
    return settings


def _connect(ctx: typer.Context) -> GeneratePDFs:
    return GeneratePDFs.connect(_load(ctx).require_api_token())


def _echo_pdf(pdf: Pdf) -> None:
    typer.echo(f"id: {pdf.id}")
    typer.echo(f"name: {pdf.name}")
    typer.echo(f"status: {pdf.status}")
    typer.echo(f"download_url: {pdf.download_url}")
    typer.echo(f"created_at: {pdf.created_at.isoformat()}")


def parse_image_option(value: str) -> ImageFile:
    """Parse a ``NAME=PATH[:MIME_TYPE]`` image option.

    Args:
        value: The raw option value.

    Returns:
        An image entry for :meth:`GeneratePDFs.generate_from_html`.

    Raises:
        typer.BadParameter: If the value has no ``=`` or an empty part.
    """
    name, sep, rest = value.partition("=")
    if not sep or not name or not rest:
        msg = f"Expected NAME=PATH[:MIME_TYPE], got {value!r}"
        raise typer.BadParameter(msg)

    path, sep, mime_type = rest.rpartition(":")
    if sep and path and "/" in mime_type:
        return {"name": name, "path": path, "mime_type": mime_type}
    return {"name": name, "path": rest}


@app.command()
def html(
    ctx: typer.Context,
    html_path: Path = typer.Argument(..., help="HTML file to convert."),
    css: Path | None = typer.Option(None, "--css", help="CSS file to apply."),
    image: list[str] | None = typer.Option(
        None,
        "--image",
        "-i",
        help="Image to embed, as NAME=PATH[:MIME_TYPE]. May be repeated.",
    ),
) -> None:
    """Generate a PDF from a local HTML file."""
    images = [parse_image_option(value) for value in image or []]
    with _handle_errors(), _connect(ctx) as client:
        pdf = client.generate_from_html(html_path, css, images or None)
        _echo_pdf(pdf)


@app.command()
def url(
    ctx: typer.Context,
    page_url: str = typer.Argument(..., metavar="URL", help="Page to convert."),
) -> None:
    """Generate a PDF from a web page."""
    with _handle_errors(), _connect(ctx) as client:
        _echo_pdf(client.generate_from_url(page_url))


@app.command()
def status(
    ctx: typer.Context,
    pdf_id: int = typer.Argument(..., help="PDF ID."),
) -> None:
    """Show the current state of a PDF job."""
    with _handle_errors(), _connect(ctx) as client:
        _echo_pdf(client.get_pdf(pdf_id))


@app.command()
def download(
    ctx: typer.Context,
    pdf_id: int = typer.Argument(..., help="PDF ID."),
    output: Path = typer.Argument(..., help="Where to save the PDF."),
) -> None:
    """Download a completed PDF to a file."""
    with _handle_errors(), _connect(ctx) as client:
        pdf = client.get_pdf(pdf_id)
        pdf.download_to_file(output)
        typer.echo(f"Saved {pdf.name} to {output}")


__all__ = ["app", "parse_image_option"]
