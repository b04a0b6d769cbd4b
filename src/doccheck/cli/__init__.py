"""CLI command implementations for doccheck."""

from doccheck.cli.check import execute_check_command
from doccheck.cli.errors import CLIError
from doccheck.cli.list import list_extensions_command

__all__ = [
    "CLIError",
    "execute_check_command",
    "list_extensions_command",
]
