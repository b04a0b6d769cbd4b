"""doccheck - concurrent validation of documents with pluggable extensions.

Loads every document reachable from an entry document once, runs the
registered extensions against each with a bounded worker pool, and reports
the aggregated issues to the console or as CI annotations.
"""

__version__ = "0.1.0"

from doccheck.aggregator import ResultAggregator
from doccheck.cache import DocumentCache
from doccheck.configuration import ValidationConfig
from doccheck.context import ValidationContext
from doccheck.engine import (
    check_docs,
    check_files,
    check_index,
    resolve_paths,
    run_check,
)
from doccheck.errors import (
    ConfigurationError,
    DocCheckError,
    DocumentLoadError,
    DuplicateResultError,
    ExtensionError,
    ExtensionNotFoundError,
)
from doccheck.extensions import (
    BaseExtension,
    Extension,
    ExtensionRegistry,
    load_extensions,
)
from doccheck.loader import DocumentLoader, IncludeScanner, TextDocumentLoader
from doccheck.models import DocumentEntry, Issue, LoadedDocument, ValidationReport
from doccheck.pool import ValidationPool
from doccheck.reporter import Reporter

__all__ = [
    # Version
    "__version__",
    # Models
    "DocumentEntry",
    "Issue",
    "LoadedDocument",
    "ValidationReport",
    # Configuration
    "ValidationConfig",
    # Loading
    "DocumentCache",
    "DocumentLoader",
    "IncludeScanner",
    "TextDocumentLoader",
    # Extensions
    "BaseExtension",
    "Extension",
    "ExtensionRegistry",
    "load_extensions",
    # Execution
    "ResultAggregator",
    "ValidationContext",
    "ValidationPool",
    "check_docs",
    "check_files",
    "check_index",
    "resolve_paths",
    "run_check",
    # Reporting
    "Reporter",
    # Errors
    "ConfigurationError",
    "DocCheckError",
    "DocumentLoadError",
    "DuplicateResultError",
    "ExtensionError",
    "ExtensionNotFoundError",
]
