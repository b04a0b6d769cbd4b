"""Bounded worker pool for document validation.

The ValidationPool validates documents in parallel using asyncio. Loading and
extension runs are synchronous, so they are bridged to async via a
ThreadPoolExecutor sized to the concurrency limit.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor

from doccheck.configuration import ValidationConfig
from doccheck.context import ValidationContext
from doccheck.errors import DocumentLoadError
from doccheck.models import LOAD_ERROR_ID, Issue, ValidationReport

logger = logging.getLogger(__name__)


def normalise_path(path: str, content_dir: str | None = None) -> str:
    """Content-relative form of ``path`` with forward slashes."""
    relative = path.replace("\\", "/")
    if content_dir:
        base = content_dir.replace("\\", "/").removeprefix("./").rstrip("/")
        relative = relative.removeprefix("./")
        if base and base != "." and relative.startswith(base + "/"):
            relative = relative[len(base) + 1 :]
    while relative.startswith("./"):
        relative = relative[2:]
    return relative


class ValidationPool:
    """Validates a queue of document paths with a fixed number of workers.

    Example:
        >>> pool = ValidationPool(context, config)
        >>> pool.submit_all(["content/foo.adoc", "content/bar.adoc"])
        >>> report = asyncio.run(pool.await_completion())

    """

    def __init__(
        self,
        context: ValidationContext,
        config: ValidationConfig,
        content_dir: str | None = None,
        exclude: Callable[[str], bool] | None = None,
    ) -> None:
        """Initialise pool for one validation run.

        Args:
            context: Per-run cache, registry and aggregator.
            config: Run configuration (worker count, timeout, exclusions).
            content_dir: Directory the include set is relative to; stripped
                before matching exclude prefixes.
            exclude: Custom predicate replacing the prefix-based one.

        """
        self._context = context
        self._config = config
        self._content_dir = content_dir
        self._exclude = exclude or self._matches_exclude_prefix
        self._queue: list[str] = []
        self._accepted: dict[str, None] = {}
        self._excluded: set[str] = set()

    def _matches_exclude_prefix(self, path: str) -> bool:
        relative = normalise_path(path, self._content_dir)
        return any(relative.startswith(p) for p in self._config.exclude_prefixes)

    def is_excluded(self, path: str) -> bool:
        """Check whether ``path`` is a partial document that is never validated."""
        return self._exclude(path)

    def submit_all(self, paths: Iterable[str]) -> list[str]:
        """Queue one validation task per path.

        Excluded and duplicate paths are dropped.

        Returns:
            Paths accepted by this call, in submission order.

        """
        accepted: list[str] = []
        for path in paths:
            if self.is_excluded(path):
                logger.debug("Skipping partial document %s", path)
                self._excluded.add(path)
                continue
            if path in self._accepted:
                continue
            self._queue.append(path)
            self._accepted[path] = None
            accepted.append(path)
        return accepted

    def cancel(self) -> None:
        """Request cooperative cancellation.

        Documents already being validated finish; no new document starts.
        """
        self._context.cancel_event.set()

    async def execute(self, paths: Iterable[str]) -> ValidationReport:
        """Submit ``paths`` and wait for every task to finish."""
        self.submit_all(paths)
        return await self.await_completion()

    async def await_completion(self) -> ValidationReport:
        """Drain the queue and return the aggregated report.

        Returns once every accepted path has a result or has been marked as
        skipped because the deadline passed or the run was cancelled.
        """
        start_time = time.monotonic()
        config = self._config
        pending, self._queue = self._queue, []
        timed_out = False

        logger.info("Pool size: %d", config.max_concurrency)

        with ThreadPoolExecutor(
            max_workers=config.max_concurrency, thread_name_prefix="doccheck"
        ) as thread_pool:
            semaphore = asyncio.Semaphore(config.max_concurrency)
            tasks = [self._validate(path, semaphore, thread_pool) for path in pending]
            try:
                async with asyncio.timeout(config.timeout):
                    await asyncio.gather(*tasks)
            except TimeoutError:
                timed_out = True
                # Workers still running finish; nothing new may start
                self._context.cancel_event.set()
                logger.warning("Validation timed out after %s seconds", config.timeout)

        aggregator = self._context.aggregator
        results = aggregator.snapshot()
        failed = aggregator.failures()
        skipped = {
            path
            for path in self._accepted
            if path not in results and path not in failed
        }
        if skipped:
            logger.warning("%d documents were not validated", len(skipped))

        return ValidationReport(
            results=results,
            failed=failed,
            skipped=skipped,
            excluded=set(self._excluded),
            total_duration_seconds=time.monotonic() - start_time,
            timed_out=timed_out,
            cancelled=self._context.cancelled and not timed_out,
        )

    async def _validate(
        self,
        path: str,
        semaphore: asyncio.Semaphore,
        thread_pool: ThreadPoolExecutor,
    ) -> None:
        """Validate a single document."""
        async with semaphore:
            if self._context.cancelled:
                return
            loop = asyncio.get_running_loop()
            try:
                await loop.run_in_executor(thread_pool, self._run_task, path)
            except Exception as e:
                logger.error("Validation of %s failed: %s", path, e)
                self._context.aggregator.record_failure(path, str(e))

    def _run_task(self, path: str) -> None:
        """Load ``path`` and run every extension on it (worker thread)."""
        if self._context.cancelled:
            return
        aggregator = self._context.aggregator
        try:
            document = self._context.cache.get_or_load(path)
        except DocumentLoadError as e:
            aggregator.record_failure(path, str(e))
            aggregator.record(path, [Issue(id=LOAD_ERROR_ID, message=str(e))])
            return

        issues = self._context.registry.run_all(document)
        aggregator.record(path, issues)
