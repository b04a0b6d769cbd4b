"""Error types for document validation runs.

This module provides:
- DocCheckError: Base exception class for all doccheck errors
- ConfigurationError: Invalid pool size, thresholds or extension specs
- DocumentLoadError: A document could not be fetched or parsed
- ExtensionError, ExtensionNotFoundError: Validator plugin exceptions
- DuplicateResultError: A path was recorded twice in one run
"""

from __future__ import annotations

from typing import override


class DocCheckError(Exception):
    """Base exception for all doccheck errors."""

    pass


class ConfigurationError(DocCheckError):
    """Raised when run configuration is invalid.

    Configuration errors are fatal and raised before any task is submitted.
    """

    pass


class DocumentLoadError(DocCheckError):
    """Raised when a document path cannot be fetched or parsed."""

    def __init__(self, path: str, reason: str) -> None:
        """Initialise load error with the failing path.

        Args:
            path: Path of the document that failed to load.
            reason: Human-readable description of the failure.

        """
        super().__init__(reason)
        self.path = path
        self.reason = reason

    @override
    def __str__(self) -> str:
        """Return message naming the failing path."""
        return f"Failed to load '{self.path}': {self.reason}"


class ExtensionError(DocCheckError):
    """Raised when an extension cannot be registered or invoked."""

    pass


class ExtensionNotFoundError(ConfigurationError, ExtensionError):
    """Raised when a configured extension spec cannot be imported."""

    def __init__(self, message: str, spec: str | None = None) -> None:
        """Initialise error with the offending ``module:attribute`` spec."""
        super().__init__(message)
        self.spec = spec


class DuplicateResultError(DocCheckError):
    """Raised when results for the same path are recorded twice."""

    pass
