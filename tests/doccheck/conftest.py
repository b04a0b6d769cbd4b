"""Shared pytest fixtures for doccheck tests."""

import logging
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path

import pytest

from doccheck.configuration import ValidationConfig
from doccheck.context import ValidationContext
from doccheck.extensions import Extension, ExtensionRegistry
from doccheck.models import DocumentEntry, Issue
from doccheck.testing import FunctionExtension, InMemoryLoader


@pytest.fixture(autouse=True)
def reset_doccheck_logger() -> Iterator[None]:
    """Undo logging configuration applied by CLI commands.

    setup_logging() stops the ``doccheck`` logger propagating to the root
    logger, which would hide records from caplog in later tests.
    """
    yield
    doccheck_logger = logging.getLogger("doccheck")
    for handler in doccheck_logger.handlers[:]:
        doccheck_logger.removeHandler(handler)
    doccheck_logger.propagate = True
    doccheck_logger.setLevel(logging.NOTSET)


@pytest.fixture
def config() -> ValidationConfig:
    """Configuration that ignores installed entry-point plugins."""
    return ValidationConfig(discover_entry_points=False)


@pytest.fixture
def make_context() -> Callable[..., ValidationContext]:
    """Factory for contexts with an in-memory loader and explicit extensions."""

    def _make(loader: InMemoryLoader, *extensions: Extension) -> ValidationContext:
        return ValidationContext.create(
            ValidationConfig(discover_entry_points=False),
            loader=loader,
            registry=ExtensionRegistry(extensions),
        )

    return _make


@pytest.fixture
def bad_link_extension() -> FunctionExtension:
    """Extension reporting E1 for paths containing 'foo'."""

    def _run(document: DocumentEntry) -> list[Issue] | None:
        if "foo" in document.path:
            return [Issue(id="E1", message="bad link")]
        return None

    return FunctionExtension(_run, name="bad_link")


@pytest.fixture
def silent_extension() -> FunctionExtension:
    """Extension that never reports anything."""
    return FunctionExtension(lambda document: None, name="silent")


@pytest.fixture
def write_docs(tmp_path: Path) -> Callable[[Mapping[str, str]], Path]:
    """Write documents below tmp_path and return the directory."""

    def _write(documents: Mapping[str, str]) -> Path:
        for name, text in documents.items():
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return tmp_path

    return _write
