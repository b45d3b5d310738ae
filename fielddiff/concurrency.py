"""Fork/join barrier for the two independent halves of a comparison."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, CancelledError, wait, FIRST_EXCEPTION
from typing import Callable, TypeVar

from .exceptions import InterruptedComparisonError

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


def run_pair(first: Callable[[], T], second: Callable[[], U]) -> tuple[T, U]:
    """
    Run two independent tasks concurrently and wait for both.

    All-or-nothing: either both results are returned, or the failure of a
    task is raised and any sibling result is discarded. When both tasks fail
    the first task's exception wins. Cancellation or a keyboard interrupt
    surfaces as InterruptedComparisonError.
    """
    executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="fielddiff")
    try:
        futures = [executor.submit(first), executor.submit(second)]
        _, pending = wait(futures, return_when=FIRST_EXCEPTION)

        for future in pending:
            future.cancel()
        # Join: a task already running cannot be cancelled
        wait(futures)

        for future in futures:
            if not future.cancelled() and future.exception() is not None:
                raise future.exception()

        return futures[0].result(), futures[1].result()
    except CancelledError as e:
        raise InterruptedComparisonError("JSON comparison task was cancelled") from e
    except KeyboardInterrupt as e:
        logger.warning("Comparison interrupted, discarding partial results")
        raise InterruptedComparisonError() from e
    finally:
        executor.shutdown(wait=True, cancel_futures=True)
