"""CLI command implementation for validating documents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from rich.console import Console

from doccheck.cli.errors import CLIError, cli_error_handler
from doccheck.configuration import ValidationConfig
from doccheck.context import ValidationContext
from doccheck.engine import check_files, check_index, run_check
from doccheck.logging import setup_logging
from doccheck.models import ValidationReport
from doccheck.reporter import Reporter

logger = logging.getLogger(__name__)
console = Console()


def _build_config(
    ci: bool | None, max_concurrency: int | None, extensions: list[str]
) -> ValidationConfig:
    properties: dict[str, Any] = {}
    if ci is not None:
        properties["ci"] = ci
    if max_concurrency is not None:
        properties["max_concurrency"] = max_concurrency
    if extensions:
        properties["extensions"] = tuple(extensions)
    return ValidationConfig.from_properties(properties)


def _validate(
    config: ValidationConfig,
    context: ValidationContext,
    entry: str | None,
    files: list[Path],
    content: Path | None,
) -> ValidationReport:
    content_dir = str(content) if content is not None else None
    if entry is None:
        return run_check(
            check_files(
                [str(f) for f in files],
                context=context,
                config=config,
                content_dir=content_dir,
            )
        )
    return run_check(
        check_index(
            entry,
            context=context,
            config=config,
            content_dir=content_dir,
        )
    )


def execute_check_command(  # noqa: PLR0913 - Matches CLI entry point signature
    index: Path | None,
    files: list[Path],
    content: Path | None = None,
    ci: bool | None = None,
    max_concurrency: int | None = None,
    extensions: list[str] | None = None,
    debug: bool = False,
    log_level: str = "INFO",
) -> ValidationReport:
    """CLI command implementation for validating documents.

    Args:
        index: Entry document; its includes are validated too.
        files: Individual documents to validate instead of an index.
        content: Directory include references are relative to.
        ci: Force CI annotation output on or off (default: from environment).
        max_concurrency: Override the worker count.
        extensions: Extra ``module:attribute`` extension specs.
        debug: Enable debug logging.
        log_level: Logging level.

    Returns:
        The validation report.

    """
    setup_logging(level="DEBUG" if debug else log_level)

    with cli_error_handler("test", "Validation failed"):
        if index is not None and files:
            raise CLIError(
                'Cannot provide "file" and "index" arguments simultaneously. Pick one!',
                command="test",
            )
        config = _build_config(ci, max_concurrency, extensions or [])
        root = content.resolve() if content is not None else None
        context = ValidationContext.create(config, root=root)

        # Explicit files have no entry document
        entry = None if files else str(index or config.index_file)
        reporter = Reporter(config, console=console, entry_document=entry)
        if not config.ci:
            reporter.print_loaded_extensions(context.registry)

        report = _validate(config, context, entry, files, content)
        reporter.report(report)

    logger.info(
        "Checked %d documents: %d issues, %d failed, %d skipped (%.2fs)",
        len(report.results),
        report.issue_count,
        len(report.failed),
        len(report.skipped),
        report.total_duration_seconds,
    )
    return report
