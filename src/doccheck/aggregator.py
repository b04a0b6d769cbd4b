"""Lock-guarded aggregation of per-document issues."""

from __future__ import annotations

import threading
from collections.abc import Sequence

from doccheck.errors import DuplicateResultError
from doccheck.models import Issue


class ResultAggregator:
    """Shared mapping from document path to its issue list.

    Every mutation happens under one lock, held only for the duration of a
    single insertion. Readers get copies, so a snapshot never aliases the
    live map.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._results: dict[str, list[Issue]] = {}
        self._failures: dict[str, str] = {}

    def record(self, path: str, issues: Sequence[Issue]) -> None:
        """Store the full issue list for ``path``.

        Raises:
            DuplicateResultError: If ``path`` was already recorded.

        """
        stored = list(issues)
        with self._lock:
            if path in self._results:
                raise DuplicateResultError(f"Results for '{path}' already recorded")
            self._results[path] = stored

    def record_failure(self, path: str, error: str) -> None:
        """Record a task-level failure for ``path``."""
        with self._lock:
            self._failures[path] = error

    def snapshot(self) -> dict[str, list[Issue]]:
        """Copy of the result map."""
        with self._lock:
            return {path: list(issues) for path, issues in self._results.items()}

    def failures(self) -> dict[str, str]:
        """Copy of recorded task failures."""
        with self._lock:
            return dict(self._failures)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._results

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)
