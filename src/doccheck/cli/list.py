"""CLI command implementation for listing available extensions."""

from __future__ import annotations

from rich.console import Console

from doccheck.cli.errors import cli_error_handler
from doccheck.configuration import ValidationConfig
from doccheck.extensions import load_extensions
from doccheck.logging import setup_logging
from doccheck.reporter import Reporter

console = Console()


def list_extensions_command(
    extensions: list[str] | None = None, log_level: str = "INFO"
) -> None:
    """List configured and installed extensions in invocation order."""
    setup_logging(level=log_level)

    with cli_error_handler("ls-extensions", "Failed to list extensions"):
        properties = {"extensions": tuple(extensions)} if extensions else {}
        config = ValidationConfig.from_properties(properties)
        registry = load_extensions(
            config.extensions, discover_entry_points=config.discover_entry_points
        )
        Reporter(config, console=console).print_loaded_extensions(registry)
