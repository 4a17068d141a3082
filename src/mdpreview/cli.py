"""Typer CLI for mdpreview: opens the preview window."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from mdpreview.config import Config
from mdpreview.models.extensions import ALL_EXTENSION_KEYS, Extension, extension_from_keys
from mdpreview.models.settings import DEFAULT_PARSING_TIMEOUT_MS, RenderSettings

app = typer.Typer(
    name="mdpreview",
    help="Markdown Preview: live HTML preview of a Markdown file.",
    add_completion=False,
)


def build_settings(
    extensions: list[str],
    all_extensions: bool,
    timeout_ms: int,
    highlight: bool,
) -> RenderSettings:
    """Build a RenderSettings snapshot from command-line values.

    Raises:
        typer.BadParameter: On unknown extensions or an invalid timeout.
    """
    try:
        flags = extension_from_keys(extensions)
    except ValueError as exc:
        raise typer.BadParameter(
            f"{exc}. Known: {', '.join(ALL_EXTENSION_KEYS)}", param_hint="--extension"
        ) from exc
    if all_extensions:
        flags |= Extension.ALL
    try:
        return RenderSettings(
            extensions=flags,
            parsing_timeout_ms=timeout_ms,
            highlight_code=highlight,
        )
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_hint="--timeout") from exc


@app.command()
def main(
    file: Annotated[
        Path | None,
        typer.Argument(exists=True, dir_okay=False, help="Markdown file to preview"),
    ] = None,
    extension: Annotated[
        list[str] | None,
        typer.Option("--extension", "-e", help="Enable an extension (repeatable)"),
    ] = None,
    all_extensions: Annotated[
        bool, typer.Option("--all-extensions", help="Enable every syntax extension")
    ] = False,
    timeout: Annotated[
        int, typer.Option("--timeout", help="Parsing timeout in milliseconds")
    ] = DEFAULT_PARSING_TIMEOUT_MS,
    highlight: Annotated[
        bool, typer.Option("--highlight/--no-highlight", help="Colour fenced code")
    ] = False,
    log_level: Annotated[str, typer.Option("--log-level", help="Logging level")] = "INFO",
) -> None:
    """Open the preview window."""
    settings = build_settings(extension or [], all_extensions, timeout, highlight)
    config = Config(file=file, settings=settings, log_level=log_level)
    from mdpreview.ui.app import run_app

    raise typer.Exit(run_app(config))
