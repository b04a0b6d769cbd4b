"""Per-run validation context.

Everything a worker touches lives here, so a run never depends on
process-wide state: a fresh context means a fresh cache and an empty result
map.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from pathlib import Path

from doccheck.aggregator import ResultAggregator
from doccheck.cache import DocumentCache
from doccheck.configuration import ValidationConfig
from doccheck.extensions import ExtensionRegistry, load_extensions
from doccheck.loader import DocumentLoader, TextDocumentLoader


@dataclass
class ValidationContext:
    """State shared by the workers of one validation run."""

    cache: DocumentCache
    registry: ExtensionRegistry
    aggregator: ResultAggregator = field(default_factory=ResultAggregator)
    cancel_event: threading.Event = field(default_factory=threading.Event)

    @classmethod
    def create(
        cls,
        config: ValidationConfig,
        loader: DocumentLoader | None = None,
        root: Path | None = None,
        registry: ExtensionRegistry | None = None,
    ) -> ValidationContext:
        """Build a context for one run.

        Args:
            config: Run configuration; supplies extension specs when no
                registry is given.
            loader: Document loader (defaults to TextDocumentLoader).
            root: Document root passed to the loader.
            registry: Pre-built registry. Loaded from ``config`` if omitted.

        Raises:
            ExtensionNotFoundError: If a configured extension cannot be loaded.

        """
        if registry is None:
            registry = load_extensions(
                config.extensions, discover_entry_points=config.discover_entry_points
            )
        return cls(
            cache=DocumentCache(loader or TextDocumentLoader(), root=root),
            registry=registry,
        )

    @property
    def cancelled(self) -> bool:
        """Whether cancellation was requested."""
        return self.cancel_event.is_set()
