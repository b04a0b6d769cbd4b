"""Main entry point for doccheck.

This module provides the command-line interface, including commands for:
- Validating an entry document and its includes, or individual files
- Listing the extensions that will run
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from doccheck.cli import execute_check_command, list_extensions_command

# Load environment variables from .env in the working directory
load_dotenv(Path.cwd() / ".env")

app = typer.Typer(name="doccheck", no_args_is_help=True)

LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        case_sensitive=False,
    ),
]
ExtensionOption = Annotated[
    list[str] | None,
    typer.Option(
        "--extension",
        "-e",
        help="Extension to load as module:attribute (repeatable)",
    ),
]


@app.command(name="test")
def test(  # noqa: PLR0913 - CLI entry point with many options
    index: Annotated[
        Path | None,
        typer.Option(
            "--index",
            help="Entry document; it and every document it includes are checked",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    file: Annotated[
        list[Path] | None,
        typer.Option(
            "--file",
            help="Check a single document (repeatable)",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    content: Annotated[
        Path | None,
        typer.Option(
            "--content",
            help="Directory include references are relative to",
            file_okay=False,
            dir_okay=True,
        ),
    ] = None,
    ci: Annotated[
        bool | None,
        typer.Option(
            "--ci/--no-ci",
            help="Emit CI annotations (default: on when GITHUB_ACTIONS=true)",
            show_default=False,
        ),
    ] = None,
    max_concurrency: Annotated[
        int | None,
        typer.Option("--max-concurrency", "-j", help="Documents checked at once", min=1),
    ] = None,
    extension: ExtensionOption = None,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
    log_level: LogLevelOption = "INFO",
) -> None:
    """Run all extensions against an index and its includes, or single files.

    Example:
        doccheck test --index content/index.adoc
        doccheck test --file content/setup.adoc --file content/usage.adoc

    """
    report = execute_check_command(
        index,
        file or [],
        content=content,
        ci=ci,
        max_concurrency=max_concurrency,
        extensions=extension,
        debug=debug,
        log_level=log_level,
    )
    if report.issue_count or report.has_failures:
        raise typer.Exit(1)


@app.command(name="ls-extensions")
def list_available_extensions(
    extension: ExtensionOption = None,
    log_level: LogLevelOption = "INFO",
) -> None:
    """List extensions in the order they run."""
    list_extensions_command(extension, log_level)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
