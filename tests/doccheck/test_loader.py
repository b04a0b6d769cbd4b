"""Tests for TextDocumentLoader, header parsing and IncludeScanner."""

from pathlib import Path

import pytest

from doccheck.errors import DocumentLoadError
from doccheck.loader import (
    DocumentLoader,
    IncludeScanner,
    TextDocumentLoader,
    parse_header_attributes,
)


class TestParseHeaderAttributes:
    """Tests for header attribute extraction."""

    def test_reads_title_and_attribute_entries(self) -> None:
        """Title and ``:name: value`` entries are collected."""
        lines = [
            "= User Guide",
            ":toc: left",
            ":experimental:",
            "",
            ":ignored: body attribute",
        ]

        assert parse_header_attributes(lines) == {
            "doctitle": "User Guide",
            "toc": "left",
            "experimental": "",
        }

    def test_skips_comments_and_unset_entries(self) -> None:
        """Comments and ``:name!:`` entries do not end the header."""
        lines = ["// comment", "= Title", ":!sectnums:", ":icons!:", ":lang: en"]

        assert parse_header_attributes(lines) == {"doctitle": "Title", "lang": "en"}

    def test_body_line_ends_header(self) -> None:
        """A non-header line stops parsing."""
        lines = ["Some paragraph", ":toc: left"]

        assert parse_header_attributes(lines) == {}

    def test_leading_blank_lines_are_skipped(self) -> None:
        """Blank lines before the header do not end it."""
        assert parse_header_attributes(["", "", "= Title"]) == {"doctitle": "Title"}


class TestTextDocumentLoader:
    """Tests for TextDocumentLoader."""

    def test_satisfies_loader_protocol(self) -> None:
        """The loader implements DocumentLoader."""
        assert isinstance(TextDocumentLoader(), DocumentLoader)

    def test_loads_lines_and_attributes(self, tmp_path: Path) -> None:
        """Parsed form is the line tuple; attributes include docfile."""
        path = tmp_path / "guide.adoc"
        path.write_text("= Guide\n:author: Ann\n\nBody\n", encoding="utf-8")

        loaded = TextDocumentLoader().load(str(path), None)

        assert loaded.original == "= Guide\n:author: Ann\n\nBody\n"
        assert loaded.parsed == ("= Guide", ":author: Ann", "", "Body")
        assert loaded.attributes["doctitle"] == "Guide"
        assert loaded.attributes["author"] == "Ann"
        assert loaded.attributes["docfile"] == str(path)

    def test_relative_path_resolves_against_root(self, tmp_path: Path) -> None:
        """A relative path missing from the working directory uses root."""
        (tmp_path / "nested.adoc").write_text("= Nested\n", encoding="utf-8")

        loaded = TextDocumentLoader().load("nested.adoc", tmp_path)

        assert loaded.attributes["doctitle"] == "Nested"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Missing documents raise DocumentLoadError naming the path."""
        missing = str(tmp_path / "missing.adoc")

        with pytest.raises(DocumentLoadError) as exc_info:
            TextDocumentLoader().load(missing, None)

        assert exc_info.value.path == missing
        assert exc_info.value.reason == "file does not exist"

    def test_undecodable_file_raises(self, tmp_path: Path) -> None:
        """Bytes that are not valid UTF-8 raise DocumentLoadError."""
        path = tmp_path / "binary.adoc"
        path.write_bytes(b"\xff\xfe\x00bad")

        with pytest.raises(DocumentLoadError):
            TextDocumentLoader().load(str(path), None)


class TestIncludeScanner:
    """Tests for IncludeScanner."""

    def test_lists_includes_in_order_without_duplicates(self, tmp_path: Path) -> None:
        """Include directives become ordered, unique reference pairs."""
        index = tmp_path / "index.adoc"
        index.write_text(
            "= Manual\n\n"
            "include::foo.adoc[]\n"
            "include::./bar.adoc[leveloffset=+1]\n"
            "Not an include::baz.adoc[]\n"
            "include::include/partial.adoc[]\n"
            "include::foo.adoc[]\n",
            encoding="utf-8",
        )

        included = IncludeScanner().included_files(index)

        assert included == [
            ("foo", "foo.adoc"),
            ("bar", "bar.adoc"),
            ("include/partial", "include/partial.adoc"),
        ]

    def test_missing_index_raises(self, tmp_path: Path) -> None:
        """An unreadable entry document raises DocumentLoadError."""
        with pytest.raises(DocumentLoadError):
            IncludeScanner().included_files(tmp_path / "index.adoc")
