"""Extensions shipped with doccheck.

Published under the ``doccheck.extensions`` entry-point group, so they load
whenever entry-point discovery is enabled.
"""

from __future__ import annotations

from typing import override

from doccheck.extensions.base import BaseExtension
from doccheck.models import DocumentEntry, Issue


class TrailingWhitespaceExtension(BaseExtension):
    """Reports lines ending in spaces or tabs."""

    issue_id = "WHITESPACE"

    @override
    def run(self, document: DocumentEntry) -> list[Issue] | None:
        lines = document.parsed if isinstance(document.parsed, (list, tuple)) else ()
        issues = [
            Issue(id=self.issue_id, message=f"Trailing whitespace on line {number}")
            for number, line in enumerate(lines, start=1)
            if isinstance(line, str) and line != line.rstrip(" \t")
        ]
        return issues or None


class DocumentTitleExtension(BaseExtension):
    """Reports documents without a level-0 title."""

    issue_id = "TITLE"

    @override
    def run(self, document: DocumentEntry) -> list[Issue] | None:
        if document.attributes.get("doctitle"):
            return None
        return [Issue(id=self.issue_id, message="Document has no title")]
