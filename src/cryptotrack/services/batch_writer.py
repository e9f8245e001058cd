"""Fan-out of independent writes with per-item outcome tracking."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, TypeVar

from cryptotrack.domain.views import BatchWriteSummary

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_WORKERS = 8


def run_independent(
    items: Iterable[T],
    operation: Callable[[T], object],
    max_workers: int = DEFAULT_MAX_WORKERS,
    describe: Callable[[T], str] = str,
) -> BatchWriteSummary:
    """
    Run operation(item) for every item in parallel.

    Writes are not transactional: a failing item is counted and logged, and
    the remaining items still run to completion.
    """
    items = list(items)
    summary = BatchWriteSummary()
    if not items:
        return summary

    workers = max(1, min(max_workers, len(items)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [(item, executor.submit(operation, item)) for item in items]
        for item, future in futures:
            exc = future.exception()
            if exc is None:
                summary.succeeded += 1
                continue
            summary.failed += 1
            message = f"{describe(item)}: {exc}"
            summary.errors.append(message)
            logger.warning("Batch write failed for %s", message)

    if summary.failed:
        logger.info(
            "Batch write finished: %d succeeded, %d failed",
            summary.succeeded, summary.failed,
        )
    return summary
