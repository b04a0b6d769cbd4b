"""Data model for document validation runs."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, NamedTuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# Issue ids emitted by the engine itself rather than by an extension
LOAD_ERROR_ID = "LOAD_ERROR"
EXTENSION_ERROR_ID = "EXTENSION_ERROR"


class LoadedDocument(NamedTuple):
    """Output of a document loader: raw text, parsed form and attributes."""

    original: str
    parsed: Any
    attributes: Mapping[str, str]


@dataclass(frozen=True)
class DocumentEntry:
    """A loaded document, immutable once created.

    Attributes:
        path: Unique document identifier (file reference).
        original: Raw source text before parsing.
        parsed: Parsed representation produced by the document loader.
        attributes: Read-only mapping of document metadata.

    """

    path: str
    original: str
    parsed: Any
    attributes: Mapping[str, str]

    def __post_init__(self) -> None:
        """Freeze the attribute mapping so callers cannot mutate it."""
        if not isinstance(self.attributes, MappingProxyType):
            object.__setattr__(
                self, "attributes", MappingProxyType(dict(self.attributes))
            )

    @classmethod
    def from_loaded(cls, path: str, loaded: LoadedDocument) -> DocumentEntry:
        """Build an entry from loader output."""
        return cls(
            path=path,
            original=loaded.original,
            parsed=loaded.parsed,
            attributes=loaded.attributes,
        )


class Issue(BaseModel):
    """A single validator finding for a document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    message: str = Field(validation_alias=AliasChoices("message", "msg"))


class ValidationReport(BaseModel):
    """Result of validating a set of documents."""

    results: dict[str, list[Issue]] = Field(default_factory=dict)
    """Validation result map: document path to its ordered issues."""

    failed: dict[str, str] = Field(default_factory=dict)
    """Paths whose task failed, with the error text."""

    skipped: set[str] = Field(default_factory=set)
    """Accepted paths that never started (timeout or cancellation)."""

    excluded: set[str] = Field(default_factory=set)
    """Paths removed by the exclude predicate before scheduling."""

    total_duration_seconds: float = 0.0
    timed_out: bool = False
    cancelled: bool = False

    @property
    def issue_count(self) -> int:
        """Total number of issues across all documents."""
        return sum(len(issues) for issues in self.results.values())

    @property
    def has_failures(self) -> bool:
        """Whether any path failed or was left unchecked."""
        return bool(self.failed or self.skipped)
