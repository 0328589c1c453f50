"""
Prometheus metrics and timing decorator for upstream platform calls.

This module defines metrics for tracking:
- Latency of each upstream operation (upload, attach, list, retrieve, ...)
- Upstream failures by operation and kind (rejected vs transport)
- Best-effort failures that were recovered locally and never reached a caller
"""

import functools
import logging
import time
from typing import Awaitable, Callable, TypeVar

from prometheus_client import Counter, Histogram

from core.errors import TransportFailureError, UpstreamRejectedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

UPSTREAM_REQUEST_TIME = Histogram(
    'kb_upstream_request_duration_seconds',
    'Time spent waiting for the knowledge base platform',
    ['operation'],
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, float("inf")]
)

UPSTREAM_ERROR_COUNT = Counter(
    'kb_upstream_errors_total',
    'Total number of failed upstream calls',
    ['operation', 'kind']  # kind: 'rejected' or 'transport'
)

RECOVERED_FAILURE_COUNT = Counter(
    'kb_recovered_failures_total',
    'Best-effort failures absorbed without failing the request',
    ['kind']  # kind: 'metadata', 'link', 'detach', 'file_delete'
)


def track_upstream(operation: str) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    A decorator factory that times an async upstream call and counts its failures.

    Args:
        operation (str): Label identifying the upstream operation.

    Returns:
        Callable: The decorator to apply to an async function.

    Example:
        @track_upstream('files.retrieve')
        async def retrieve_file(self, file_id: str) -> FileMetadata:
            ...
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            start_time = time.monotonic()
            try:
                return await func(*args, **kwargs)
            except UpstreamRejectedError:
                UPSTREAM_ERROR_COUNT.labels(operation=operation, kind='rejected').inc()
                raise
            except TransportFailureError:
                UPSTREAM_ERROR_COUNT.labels(operation=operation, kind='transport').inc()
                raise
            finally:
                duration = time.monotonic() - start_time
                UPSTREAM_REQUEST_TIME.labels(operation=operation).observe(duration)
                logger.debug("Upstream %s took %.3f seconds", operation, duration)
        return wrapper
    return decorator
