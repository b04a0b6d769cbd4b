"""Validator plugin contract, registry and built-in extensions."""

from doccheck.extensions.base import BaseExtension, Extension, ExtensionResult
from doccheck.extensions.builtin import (
    DocumentTitleExtension,
    TrailingWhitespaceExtension,
)
from doccheck.extensions.registry import (
    ENTRY_POINT_GROUP,
    ExtensionRegistry,
    import_extension,
    load_extensions,
)

__all__ = [
    "ENTRY_POINT_GROUP",
    "BaseExtension",
    "DocumentTitleExtension",
    "Extension",
    "ExtensionRegistry",
    "ExtensionResult",
    "TrailingWhitespaceExtension",
    "import_extension",
    "load_extensions",
]
