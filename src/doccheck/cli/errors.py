"""CLI error handling for doccheck."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import override

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from doccheck.errors import (
    ConfigurationError,
    DocumentLoadError,
    ExtensionError,
    ExtensionNotFoundError,
)

logger = logging.getLogger(__name__)
console = Console(stderr=True)


class CLIError(Exception):
    """Exception for CLI-related errors with command context."""

    def __init__(
        self,
        message: str,
        command: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialise CLI error with context.

        Args:
            message: Human-readable error message describing what went wrong
            command: Name of the CLI command that failed (e.g., "test")
            original_error: The underlying exception that caused this CLI error

        """
        super().__init__(message)
        self.command = command
        self.original_error = original_error

    @override
    def __str__(self) -> str:
        """Return formatted error message with CLI context."""
        base_message = super().__str__()
        if self.command:
            return f"CLI command '{self.command}' failed: {base_message}"
        return base_message


def describe_error(error: BaseException | None) -> list[str]:
    """Hints naming the document or extension spec behind ``error``."""
    if isinstance(error, DocumentLoadError):
        return [f"Document: {error.path}"]
    if isinstance(error, ExtensionNotFoundError):
        hints = [f"Extension spec: {error.spec}"] if error.spec else []
        return [*hints, "Check --extension options and DOCCHECK_EXTENSIONS"]
    if isinstance(error, ExtensionError):
        return ["Check the extensions loaded for this run (doccheck ls-extensions)"]
    if isinstance(error, ConfigurationError):
        return ["Check DOCCHECK_* environment variables and command options"]
    return []


def _print_error_panel(error: CLIError, title: str) -> None:
    body = f"[red]{escape(str(error))}[/red]"
    hints = describe_error(error.original_error)
    if hints:
        body += "\n\n" + "\n".join(f"[dim]{escape(hint)}[/dim]" for hint in hints)
    subtitle = f"doccheck {error.command}" if error.command else None
    console.print(Panel(body, title=title, subtitle=subtitle, border_style="red"))


@contextmanager
def cli_error_handler(command: str, title: str) -> Generator[None]:
    """Context manager for unified CLI error handling.

    Catches exceptions, displays them as Rich error panels, and exits
    with code 2. Handles both pre-wrapped CLIError and raw exceptions.
    Load and extension errors add the failing document or extension spec
    to the panel.

    Args:
        command: CLI command name for error context.
        title: Panel title for the error display.

    """
    try:
        yield
    except CLIError as e:
        logger.error("%s: %s", title, e)
        _print_error_panel(e, title)
        raise typer.Exit(2) from e
    except Exception as e:
        cli_error = CLIError(str(e), command=command, original_error=e)
        logger.error("%s: %s", title, cli_error)
        _print_error_panel(cli_error, title)
        raise typer.Exit(2) from cli_error
