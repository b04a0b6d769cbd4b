"""Extension registry and discovery.

The registry holds an ordered, per-run collection of validator plugins.
Registration order is the invocation order, so repeated runs over the same
document produce issues in the same order.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterable, Iterator, Mapping
from importlib.metadata import entry_points

from doccheck.errors import ExtensionError, ExtensionNotFoundError
from doccheck.extensions.base import Extension, IssueLike, extension_name
from doccheck.models import EXTENSION_ERROR_ID, DocumentEntry, Issue

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "doccheck.extensions"


def _coerce_issue(item: IssueLike) -> Issue:
    if isinstance(item, Issue):
        return item
    if isinstance(item, Mapping):
        return Issue.model_validate(dict(item))
    raise ExtensionError(f"Unsupported issue type: {type(item).__name__}")


class ExtensionRegistry:
    """Ordered collection of extensions, read-only once a run starts.

    Example:
        >>> registry = ExtensionRegistry()
        >>> registry.register(TrailingWhitespaceExtension())
        >>> issues = registry.run_all(document)

    """

    def __init__(self, extensions: Iterable[Extension] = ()) -> None:
        """Initialise registry, registering ``extensions`` in order."""
        self._extensions: list[Extension] = []
        for extension in extensions:
            self.register(extension)

    def register(self, extension: Extension) -> None:
        """Append an extension to the registry.

        Registering the same instance twice is a no-op.

        Args:
            extension: Object implementing the Extension protocol.

        Raises:
            ExtensionError: If the object has no callable ``run`` method.

        """
        if not isinstance(extension, Extension) or not callable(extension.run):
            raise ExtensionError(
                f"{type(extension).__name__} does not implement run(document)"
            )
        if any(existing is extension for existing in self._extensions):
            return
        self._extensions.append(extension)
        logger.debug("Registered extension %s", extension_name(extension))

    def all(self) -> tuple[Extension, ...]:
        """Return registered extensions in registration order."""
        return tuple(self._extensions)

    def names(self) -> list[str]:
        """Return display names of registered extensions."""
        return [extension_name(ext) for ext in self._extensions]

    def run_all(self, document: DocumentEntry) -> list[Issue]:
        """Run every extension against ``document`` in registry order.

        Only list or tuple returns contribute issues. An extension that
        raises is isolated: the failure is logged and recorded as an
        EXTENSION_ERROR issue, and the remaining extensions still run.

        Args:
            document: Loaded document to validate.

        Returns:
            Accumulated issues for the document.

        """
        issues: list[Issue] = []
        for extension in self._extensions:
            name = extension_name(extension)
            try:
                result = extension.run(document)
                if isinstance(result, (list, tuple)):
                    issues.extend([_coerce_issue(item) for item in result])
            except Exception as e:
                logger.error(
                    "Extension %s failed on %s: %s",
                    name,
                    document.path,
                    e,
                    exc_info=logger.isEnabledFor(logging.DEBUG),
                )
                issues.append(
                    Issue(id=EXTENSION_ERROR_ID, message=f"{name} failed: {e}")
                )
        return issues

    def __len__(self) -> int:
        """Number of registered extensions."""
        return len(self._extensions)

    def __iter__(self) -> Iterator[Extension]:
        """Iterate extensions in registration order."""
        return iter(tuple(self._extensions))


def _instantiate(target: object, source: str) -> Extension:
    candidate = target() if isinstance(target, type) else target
    if not isinstance(candidate, Extension):
        raise ExtensionError(f"'{source}' does not provide an extension")
    return candidate


def import_extension(spec: str) -> Extension:
    """Import an extension from a ``module:attribute`` spec.

    Classes are instantiated without arguments; other objects are used as-is.

    Raises:
        ExtensionNotFoundError: If the module or attribute cannot be found.
        ExtensionError: If the target does not implement the protocol.

    """
    module_name, sep, attribute = spec.partition(":")
    if not sep or not module_name or not attribute:
        raise ExtensionNotFoundError(
            f"Invalid extension spec '{spec}'. Expected format: module:attribute",
            spec=spec,
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ExtensionNotFoundError(
            f"Cannot import extension module '{module_name}': {e}",
            spec=spec,
        ) from e
    try:
        target = getattr(module, attribute)
    except AttributeError as e:
        raise ExtensionNotFoundError(
            f"Module '{module_name}' has no extension '{attribute}'",
            spec=spec,
        ) from e
    return _instantiate(target, spec)


def load_extensions(
    specs: Iterable[str] = (), discover_entry_points: bool = True
) -> ExtensionRegistry:
    """Build a registry from configured specs and installed plugins.

    Configured specs come first, in the order given. Entry-point plugins
    follow, sorted by entry-point name; a plugin whose class was already
    loaded from a spec is skipped.

    Args:
        specs: Ordered ``module:attribute`` extension specs.
        discover_entry_points: Also load the ``doccheck.extensions`` group.

    Returns:
        Populated ExtensionRegistry.

    Raises:
        ExtensionNotFoundError: If a configured spec cannot be imported.

    """
    registry = ExtensionRegistry()
    loaded_types: set[type] = set()

    for spec in specs:
        extension = import_extension(spec)
        registry.register(extension)
        loaded_types.add(type(extension))

    if discover_entry_points:
        for ep in sorted(entry_points(group=ENTRY_POINT_GROUP), key=lambda e: e.name):
            try:
                extension = _instantiate(ep.load(), ep.value)
            except Exception as e:
                logger.warning("Failed to load extension plugin '%s': %s", ep.name, e)
                continue
            if type(extension) in loaded_types:
                continue
            registry.register(extension)
            loaded_types.add(type(extension))

    logger.info("Loaded %d extensions", len(registry))
    return registry
