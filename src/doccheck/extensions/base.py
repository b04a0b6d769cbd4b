"""Extension contract for document validators.

Defines the capability every validator plugin must satisfy:

- ``Extension`` - structural protocol, ``run(document) -> issues | None``
- ``BaseExtension`` - optional ABC supplying a display name
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from doccheck.models import DocumentEntry, Issue

type IssueLike = Issue | Mapping[str, Any]
type ExtensionResult = Sequence[IssueLike] | None


@runtime_checkable
class Extension(Protocol):
    """Protocol for validator plugins.

    The engine calls ``run`` once per document. Returning ``None`` (or any
    non-list value) means the document has no issues for this extension.

    The protocol is runtime_checkable so the registry can verify plugins
    with isinstance() at registration time.
    """

    def run(self, document: DocumentEntry) -> ExtensionResult:
        """Inspect ``document`` and return its issues.

        Args:
            document: Loaded document to validate.

        Returns:
            Sequence of Issue objects (or ``{"id": ..., "msg": ...}``
            mappings), or None when there is nothing to report.

        """
        ...


class BaseExtension(ABC):
    """Convenience base class for extensions shipped with doccheck.

    Example:
        class NoTabsExtension(BaseExtension):
            def run(self, document: DocumentEntry) -> list[Issue] | None:
                if "\\t" in document.original:
                    return [Issue(id="TABS", message="Document contains tabs")]
                return None

    """

    @classmethod
    def get_name(cls) -> str:
        """Return the extension's display name."""
        return cls.__name__

    @abstractmethod
    def run(self, document: DocumentEntry) -> ExtensionResult:
        """Inspect ``document`` and return its issues, or None."""
        ...


def extension_name(extension: object) -> str:
    """Display name for any extension object, based or not on BaseExtension."""
    get_name = getattr(extension, "get_name", None)
    if callable(get_name):
        return str(get_name())
    return type(extension).__name__
