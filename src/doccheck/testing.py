"""Testing utilities for doccheck and extension authors.

Provides an in-memory document loader, a function-backed extension and
contract tests that every extension implementation should pass.
"""

import threading
import time
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import pytest

from doccheck.errors import DocumentLoadError
from doccheck.extensions.base import Extension, ExtensionResult, extension_name
from doccheck.models import DocumentEntry, Issue, LoadedDocument


class InMemoryLoader:
    """Document loader serving text from a dict and counting loads per path."""

    def __init__(self, documents: Mapping[str, str], delay: float = 0.0) -> None:
        """Initialise loader.

        Args:
            documents: Mapping of path to document text.
            delay: Seconds to sleep inside each load, to widen race windows.

        """
        self.documents = dict(documents)
        self.delay = delay
        self.calls: dict[str, int] = {}
        self._lock = threading.Lock()

    def load(self, path: str, root: Path | None) -> LoadedDocument:
        """Return the stored text for ``path``.

        Raises:
            DocumentLoadError: If ``path`` is unknown.

        """
        with self._lock:
            self.calls[path] = self.calls.get(path, 0) + 1
        if self.delay:
            time.sleep(self.delay)
        if path not in self.documents:
            raise DocumentLoadError(path, "file does not exist")
        text = self.documents[path]
        return LoadedDocument(
            original=text, parsed=tuple(text.splitlines()), attributes={}
        )


class FunctionExtension:
    """Extension backed by a plain function."""

    def __init__(
        self, func: Callable[[DocumentEntry], ExtensionResult], name: str = "function"
    ) -> None:
        self._func = func
        self._name = name

    def get_name(self) -> str:
        """Return the configured name."""
        return self._name

    def run(self, document: DocumentEntry) -> ExtensionResult:
        """Delegate to the wrapped function."""
        return self._func(document)


def make_document(
    path: str = "doc.adoc",
    text: str = "= Title\n",
    attributes: Mapping[str, str] | None = None,
) -> DocumentEntry:
    """Build a DocumentEntry without going through a loader."""
    return DocumentEntry(
        path=path,
        original=text,
        parsed=tuple(text.splitlines()),
        attributes=dict(attributes) if attributes is not None else {},
    )


class ExtensionContractTests:
    """Contract tests that all Extension implementations must pass.

    Required Fixtures:
        extension: Extension instance to test
        document: DocumentEntry the extension can process

    Usage Pattern:
        class TestMyExtension(ExtensionContractTests):
            @pytest.fixture
            def extension(self) -> Extension:
                return MyExtension()

            @pytest.fixture
            def document(self) -> DocumentEntry:
                return make_document(text="= Title\\n\\nBody\\n")

    """

    @pytest.fixture
    def extension(self) -> Extension:
        """Provide Extension instance to test.

        Raises:
            NotImplementedError: If subclass doesn't override this fixture

        """
        raise NotImplementedError(
            "Subclass must provide 'extension' fixture with Extension instance"
        )

    @pytest.fixture
    def document(self) -> DocumentEntry:
        """Provide a document for the extension to inspect.

        Raises:
            NotImplementedError: If subclass doesn't override this fixture

        """
        raise NotImplementedError(
            "Subclass must provide 'document' fixture with DocumentEntry instance"
        )

    def test_implements_extension_protocol(self, extension: Extension) -> None:
        """Extension satisfies the runtime-checkable protocol."""
        assert isinstance(extension, Extension)

    def test_has_display_name(self, extension: Extension) -> None:
        """Extension has a non-empty display name."""
        assert extension_name(extension)

    def test_run_returns_issues_or_none(
        self, extension: Extension, document: DocumentEntry
    ) -> None:
        """run() returns None or a list/tuple of issues."""
        result = extension.run(document)

        assert result is None or isinstance(result, (list, tuple))
        for item in result or ():
            issue = item if isinstance(item, Issue) else Issue.model_validate(item)
            assert issue.id
            assert issue.message

    def test_run_is_deterministic(
        self, extension: Extension, document: DocumentEntry
    ) -> None:
        """Repeated runs on the same document return the same issues."""
        assert _as_list(extension.run(document)) == _as_list(extension.run(document))


def _as_list(result: ExtensionResult) -> list[Any]:
    return list(result) if isinstance(result, (list, tuple)) else []
