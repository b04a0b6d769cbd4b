"""Entry points for validating an include set, explicit files or an index."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Coroutine, Iterable, Sequence
from pathlib import Path
from typing import Any, Protocol

from doccheck.configuration import ValidationConfig
from doccheck.context import ValidationContext
from doccheck.loader import DOCUMENT_SUFFIX, IncludeScanner
from doccheck.models import ValidationReport
from doccheck.pool import ValidationPool

logger = logging.getLogger(__name__)

type IncludeReference = str | tuple[str, str]


class IncludeSetProvider(Protocol):
    """Supplies the documents reachable from an entry document."""

    def included_files(self, index_path: Path) -> list[tuple[str, str]]:
        """Return ordered ``(reference, content_relative_path)`` pairs."""
        ...


def resolve_paths(
    included_files: Iterable[IncludeReference], content_dir: str
) -> list[str]:
    """Turn include references into document paths.

    Each reference becomes ``<content_dir>/<reference>.adoc``; references that
    already carry the suffix keep it.
    """
    paths: list[str] = []
    for item in included_files:
        reference = item if isinstance(item, str) else item[0]
        path = os.path.join(content_dir, reference)
        if not path.endswith(DOCUMENT_SUFFIX):
            path += DOCUMENT_SUFFIX
        paths.append(path)
    return paths


async def check_docs(
    included_files: Iterable[IncludeReference],
    content_dir: str,
    *,
    context: ValidationContext,
    config: ValidationConfig,
) -> ValidationReport:
    """Check all included files in ``content_dir``.

    Args:
        included_files: Include references, bare or paired with their
            content-relative path.
        content_dir: Directory the references are relative to.
        context: Per-run cache, registry and aggregator.
        config: Run configuration.

    Returns:
        ValidationReport keyed by resolved document path.

    """
    paths = resolve_paths(included_files, content_dir)
    pool = ValidationPool(context, config, content_dir=content_dir)
    return await pool.execute(paths)


async def check_files(
    paths: Sequence[str],
    *,
    context: ValidationContext,
    config: ValidationConfig,
    content_dir: str | None = None,
) -> ValidationReport:
    """Check explicitly named documents."""
    pool = ValidationPool(context, config, content_dir=content_dir)
    return await pool.execute(paths)


async def check_index(
    index_file: str,
    *,
    context: ValidationContext,
    config: ValidationConfig,
    content_dir: str | None = None,
    provider: IncludeSetProvider | None = None,
) -> ValidationReport:
    """Check an entry document and every document it includes.

    Args:
        index_file: Path of the entry document.
        context: Per-run cache, registry and aggregator.
        config: Run configuration.
        content_dir: Directory includes are relative to; defaults to the
            entry document's directory.
        provider: Include-set provider (defaults to IncludeScanner).

    Raises:
        DocumentLoadError: If the entry document cannot be read.

    """
    if content_dir is None:
        content_dir = os.path.dirname(index_file) or "."
    provider = provider or IncludeScanner()
    included = provider.included_files(Path(index_file))
    logger.info("Checking %s with %d includes", index_file, len(included))

    pool = ValidationPool(context, config, content_dir=content_dir)
    pool.submit_all([index_file])
    pool.submit_all(resolve_paths(included, content_dir))
    return await pool.await_completion()


def run_check[T](coroutine: Coroutine[Any, Any, T]) -> T:
    """Run a check coroutine to completion from synchronous code."""
    return asyncio.run(coroutine)
