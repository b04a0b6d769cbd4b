"""Document loading and include-set discovery.

The markup engine itself is an external collaborator. This module defines the
loader contract the cache depends on, plus a plain-text loader that reads the
header attributes of AsciiDoc-style documents without interpreting the body.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Protocol, runtime_checkable

from doccheck.errors import DocumentLoadError
from doccheck.models import LoadedDocument

logger = logging.getLogger(__name__)

_ATTRIBUTE_ENTRY = re.compile(r"^:(?P<name>[\w][\w-]*):(?:\s+(?P<value>.*))?$")
_UNSET_ENTRY = re.compile(r"^:(?:![\w][\w-]*|[\w][\w-]*!):$")
_DOCUMENT_TITLE = re.compile(r"^=\s+(?P<title>\S.*)$")
_INCLUDE_DIRECTIVE = re.compile(r"^include::(?P<target>[^\[\s]+)\[[^\]]*\]\s*$")

DOCUMENT_SUFFIX = ".adoc"


@runtime_checkable
class DocumentLoader(Protocol):
    """Protocol for loaders that turn a path into a parsed document.

    Implementations raise DocumentLoadError when the path does not exist or
    the content cannot be parsed.
    """

    def load(self, path: str, root: Path | None) -> LoadedDocument:
        """Load and parse the document at ``path``.

        Args:
            path: Document path, absolute or relative to the working directory.
            root: Document root used to resolve relative references.

        Returns:
            Raw text, parsed form and attributes of the document.

        """
        ...


def _resolve(path: str, root: Path | None) -> Path:
    candidate = Path(path)
    if root is not None and not candidate.is_absolute() and not candidate.exists():
        return root / candidate
    return candidate


def parse_header_attributes(lines: list[str]) -> dict[str, str]:
    """Extract document title and attribute entries from the header.

    The header ends at the first blank line after content has started.
    Unset entries (``:name!:``) and comment lines are ignored.
    """
    attributes: dict[str, str] = {}
    started = False
    for line in lines:
        stripped = line.strip()
        if not stripped:
            if started:
                break
            continue
        if stripped.startswith("//"):
            continue
        if _UNSET_ENTRY.match(stripped):
            started = True
            continue
        if not started and (title := _DOCUMENT_TITLE.match(stripped)):
            attributes["doctitle"] = title.group("title").strip()
            started = True
            continue
        if match := _ATTRIBUTE_ENTRY.match(stripped):
            attributes[match.group("name")] = (match.group("value") or "").strip()
            started = True
            continue
        # First body line before any blank line ends the header
        break
    return attributes


class TextDocumentLoader:
    """Loads UTF-8 documents, exposing their lines as the parsed form."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def load(self, path: str, root: Path | None) -> LoadedDocument:
        """Read the document and parse its header attributes.

        Raises:
            DocumentLoadError: If the file is missing or cannot be decoded.

        """
        file_path = _resolve(path, root)
        try:
            original = file_path.read_text(encoding=self._encoding)
        except FileNotFoundError as e:
            raise DocumentLoadError(path, "file does not exist") from e
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(path, str(e)) from e

        lines = original.splitlines()
        attributes = parse_header_attributes(lines)
        attributes.setdefault("docfile", str(file_path))
        logger.debug("Loaded %s (%d lines)", path, len(lines))
        return LoadedDocument(
            original=original, parsed=tuple(lines), attributes=attributes
        )


class IncludeScanner:
    """Include-set provider reading ``include::`` directives of an entry document."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def included_files(self, index_path: Path) -> list[tuple[str, str]]:
        """List documents included by ``index_path``.

        Args:
            index_path: Path of the entry document.

        Returns:
            Ordered, de-duplicated ``(reference, content_relative_path)``
            pairs, where the reference is the path without its ``.adoc``
            suffix.

        Raises:
            DocumentLoadError: If the entry document cannot be read.

        """
        try:
            text = index_path.read_text(encoding=self._encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(str(index_path), str(e)) from e

        seen: set[str] = set()
        included: list[tuple[str, str]] = []
        for line in text.splitlines():
            match = _INCLUDE_DIRECTIVE.match(line.strip())
            if match is None:
                continue
            target = match.group("target").removeprefix("./")
            if target in seen:
                continue
            seen.add(target)
            included.append((target.removesuffix(DOCUMENT_SUFFIX), target))

        logger.debug("Found %d includes in %s", len(included), index_path)
        return included
