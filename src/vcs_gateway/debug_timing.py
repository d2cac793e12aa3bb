"""Debug timing helpers for gateway operations."""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


@contextmanager
def timed_operation(description: str, *, request_id: str | None = None) -> Iterator[None]:
    """Log the start and completion of an operation with its elapsed time.

    The completion record is emitted even when the body raises.
    """
    suffix = f" [{request_id}]" if request_id is not None else ""
    logger.debug("Starting: %s%s", description, suffix)
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug("Completed in %.0fms: %s%s", elapsed_ms, description, suffix)
