"""
Monitoring package initializer.

This package exposes Prometheus metrics and the helper decorator used to time
calls to the upstream knowledge base platform.
"""

from .metrics import (
    UPSTREAM_REQUEST_TIME,
    UPSTREAM_ERROR_COUNT,
    RECOVERED_FAILURE_COUNT,
    track_upstream,
)

__all__ = [
    'UPSTREAM_REQUEST_TIME',
    'UPSTREAM_ERROR_COUNT',
    'RECOVERED_FAILURE_COUNT',
    'track_upstream',
]
