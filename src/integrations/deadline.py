"""
Wall-clock deadline for outbound provider calls.

Client timeouts (requests' timeout=, botocore connect/read timeouts) bound
each socket operation, so a provider that keeps sending a byte at a time
can hold a call open indefinitely. call_with_deadline bounds the whole call.

Usage:
    from integrations.deadline import DeadlineExceeded, call_with_deadline

    response = call_with_deadline(10, requests.post, url, json=payload, timeout=10)
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Callable

logger = logging.getLogger(__name__)


class DeadlineExceeded(Exception):
    """The call did not finish within its total time budget."""

    def __init__(self, seconds: float):
        super().__init__(f"Call did not complete within {seconds}s")
        self.seconds = seconds


def call_with_deadline(seconds: float, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """
    Run func(*args, **kwargs) and wait at most `seconds` for it.

    Exceptions raised by func propagate unchanged. On expiry the worker is
    abandoned; the per-operation client timeout still ends it.

    Raises:
        DeadlineExceeded: If func is still running when the deadline passes
    """
    # One worker per call; nothing is shared between invocations
    executor = ThreadPoolExecutor(max_workers=1)
    future = executor.submit(func, *args, **kwargs)
    try:
        return future.result(timeout=seconds)
    except FutureTimeoutError:
        if not future.done():
            future.cancel()
            logger.warning(f"Outbound call exceeded its {seconds}s deadline")
            raise DeadlineExceeded(seconds)
        raise
    finally:
        executor.shutdown(wait=False)
