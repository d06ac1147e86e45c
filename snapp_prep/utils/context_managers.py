"""Utility context managers."""

import logging
import time
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager

logger = logging.getLogger(__name__)


@contextmanager
def timed_stage(
    label: str,
    stage_seconds: MutableMapping[str, float],
) -> Iterator[None]:
    """Time one pipeline stage and record its duration.

    Parameters
    ----------
    label : str
        Name of the stage. Used as the key in `stage_seconds` and in the
        debug log message.
    stage_seconds : MutableMapping[str, float]
        Elapsed seconds per stage label. The stage is recorded even if
        it raises, so partial runs can be profiled.

    Returns
    -------
    Context manager for timing a pipeline stage.

    """
    start_time = time.perf_counter()
    try:
        yield
    finally:
        elapsed_seconds = time.perf_counter() - start_time
        stage_seconds[label] = elapsed_seconds
        logger.debug(f"Stage timing: {label}: {elapsed_seconds:.3f} seconds\n")
