"""Console and CI rendering of validation results."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from doccheck.configuration import ValidationConfig
from doccheck.extensions import ExtensionRegistry
from doccheck.models import Issue, ValidationReport

logger = logging.getLogger(__name__)

type ResultMap = Mapping[str, Sequence[Issue]]


def _normalise(path: str) -> str:
    normalised = path.replace("\\", "/")
    while normalised.startswith("./"):
        normalised = normalised[2:]
    return normalised


class Reporter:
    """Renders a validation result map.

    Output modes:
        - CI summary: CI flag set, more than one document checked and the
          issue count above the threshold. One warning line instead of the
          per-issue lines.
        - CI compact: CI flag set, more than one document checked and the
          issue count within the threshold. One annotation per issue.
        - Verbose: everything else. A header per file with issues, then
          ``id`` and message per issue.

    When given a ValidationReport, documents whose task failed or that were
    never validated are listed after the issues, as annotations when the CI
    flag is set.

    The entry document's own issues are not enumerated unless
    ``report_entry_document`` is enabled.
    """

    SUMMARY_TEMPLATE = (
        "::warning::More than {threshold} errors found, please check Build log"
    )
    ANNOTATION_TEMPLATE = "::warning file={file}::{message}"
    UNCHECKED_TEMPLATE = "::warning::{count} documents were not validated ({reason})"

    def __init__(
        self,
        config: ValidationConfig,
        console: Console | None = None,
        entry_document: str | None = None,
    ) -> None:
        """Initialise reporter.

        Args:
            config: Supplies the CI flag and error threshold.
            console: Rich console to write to (defaults to stdout).
            entry_document: Path of the entry document exactly as it was
                submitted for validation. None when the run has no entry
                document, e.g. when explicit files are checked.

        """
        self._config = config
        self._console = console or Console()
        self._entry_document = (
            _normalise(entry_document) if entry_document is not None else None
        )

    def is_entry_document(self, path: str) -> bool:
        """Check whether ``path`` is the entry document of this run."""
        return self._entry_document is not None and _normalise(path) == (
            self._entry_document
        )

    def report(self, results: ValidationReport | ResultMap) -> None:
        """Print the issues in ``results``.

        Args:
            results: A ValidationReport or a bare path -> issues mapping.
                Not modified.

        """
        result_map: ResultMap = (
            results.results if isinstance(results, ValidationReport) else results
        )
        total = sum(len(issues) for issues in result_map.values())
        threshold = self._config.error_threshold
        ci_mode = self._config.ci and len(result_map) > 1

        if ci_mode and total > threshold:
            self._console.out(
                self.SUMMARY_TEMPLATE.format(threshold=threshold), highlight=False
            )
        else:
            self._print_issues(result_map, ci_mode)

        if isinstance(results, ValidationReport):
            self._print_failures(results)
            self._print_unchecked(results)

    def _print_issues(self, result_map: ResultMap, ci_mode: bool) -> None:
        for file, issues in result_map.items():
            if not issues:
                continue
            if self.is_entry_document(file) and not self._config.report_entry_document:
                logger.warning(
                    "%d issues in entry document %s are not reported", len(issues), file
                )
                continue
            if ci_mode:
                self._print_annotations(file, issues)
            else:
                self._print_verbose(file, issues)

    def _print_failures(self, report: ValidationReport) -> None:
        for file, error in report.failed.items():
            # Load errors are already listed as issues of the document
            if any(issue.message == error for issue in report.results.get(file, ())):
                continue
            if self._config.ci:
                self._console.out(
                    self.ANNOTATION_TEMPLATE.format(
                        file=file, message=f"Validation failed: {error}"
                    ),
                    highlight=False,
                )
            else:
                self._console.print(
                    f"[bold red]FAILED[/bold red] {escape(file)}: {escape(error)}"
                )

    def _print_unchecked(self, report: ValidationReport) -> None:
        if not report.skipped:
            return
        if report.timed_out:
            reason = "run timed out"
        elif report.cancelled:
            reason = "run cancelled"
        else:
            reason = "not started"

        if self._config.ci:
            self._console.out(
                self.UNCHECKED_TEMPLATE.format(
                    count=len(report.skipped), reason=reason
                ),
                highlight=False,
            )
            return
        self._console.print(
            f"[bold yellow]NOT VALIDATED[/bold yellow] "
            f"{len(report.skipped)} documents ({reason})"
        )
        for file in sorted(report.skipped):
            self._console.print(f"  {escape(file)}", highlight=False)

    def _print_annotations(self, file: str, issues: Sequence[Issue]) -> None:
        for issue in issues:
            self._console.out(
                self.ANNOTATION_TEMPLATE.format(file=file, message=issue.message),
                highlight=False,
            )

    def _print_verbose(self, file: str, issues: Sequence[Issue]) -> None:
        self._console.print(f"[bold red]ERRORS[/bold red] for file {escape(file)}")
        for issue in issues:
            self._console.print(
                f"{issue.id}\t{issue.message}",
                style="bold red",
                markup=False,
                highlight=False,
            )

    def print_loaded_extensions(self, registry: ExtensionRegistry) -> None:
        """Print a table of the extensions that will run."""
        if not len(registry):
            self._console.print("[yellow]No extensions loaded[/yellow]")
            return
        table = Table(
            title="Loaded Extensions", show_header=True, header_style="bold magenta"
        )
        table.add_column("Order", style="blue", justify="right")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Class", style="dim")
        for position, (name, extension) in enumerate(
            zip(registry.names(), registry.all(), strict=True), start=1
        ):
            cls = type(extension)
            table.add_row(str(position), name, f"{cls.__module__}.{cls.__name__}")
            logger.debug("Extension %s: %s", name, cls.__name__)
        self._console.print(table)
