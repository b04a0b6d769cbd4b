"""Per-run memoisation of loaded documents.

DocumentCache guarantees single-flight loading: when several workers request
the same uncached path at once, exactly one of them invokes the loader and the
others block until that load settles, then observe the same entry (or the
same DocumentLoadError).
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from pathlib import Path

from doccheck.errors import DocumentLoadError
from doccheck.loader import DocumentLoader
from doccheck.models import DocumentEntry

logger = logging.getLogger(__name__)


class DocumentCache:
    """Thread-safe cache of DocumentEntry objects keyed by path.

    The lock guards only the path -> future map. Loading happens outside the
    lock so unrelated paths load concurrently.
    """

    def __init__(self, loader: DocumentLoader, root: Path | None = None) -> None:
        """Initialise cache with the document loader.

        Args:
            loader: External loader invoked on the first request for a path.
            root: Document root passed through to the loader.

        """
        self._loader = loader
        self._root = root
        self._lock = threading.Lock()
        self._entries: dict[str, Future[DocumentEntry]] = {}

    def get_or_load(self, path: str) -> DocumentEntry:
        """Return the cached entry for ``path``, loading it on first access.

        Args:
            path: Document path.

        Returns:
            The DocumentEntry for the path. Repeated calls return the same
            object.

        Raises:
            DocumentLoadError: If the loader fails for this path. Failures are
                memoised for the rest of the run.

        """
        with self._lock:
            future = self._entries.get(path)
            owner = future is None
            if future is None:
                future = Future()
                self._entries[path] = future

        if owner:
            self._load_into(path, future)

        return future.result()

    def _load_into(self, path: str, future: Future[DocumentEntry]) -> None:
        try:
            loaded = self._loader.load(path, self._root)
            entry = DocumentEntry.from_loaded(path, loaded)
        except DocumentLoadError as e:
            logger.warning("%s", e)
            future.set_exception(e)
        except Exception as e:
            logger.warning("Loader failed for '%s': %s", path, e)
            error = DocumentLoadError(path, str(e))
            error.__cause__ = e
            future.set_exception(error)
        else:
            future.set_result(entry)

    def __contains__(self, path: object) -> bool:
        """Check whether a load for ``path`` has been started."""
        with self._lock:
            return path in self._entries

    def __len__(self) -> int:
        """Number of paths requested so far."""
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        """Drop all cached entries."""
        with self._lock:
            self._entries.clear()
