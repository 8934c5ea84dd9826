r"""Retry package implementing the attempt loop.

Public API:
    - RetryConfig: Configuration for retry behavior
    - apply_options: Build a configuration from option functions
    - RetryExecutor: Synchronous retry executor
    - AsyncRetryExecutor: Asynchronous retry executor
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_DELAY",
    "DEFAULT_MAX_RETRIES",
    "AsyncRetryExecutor",
    "RetryConfig",
    "RetryExecutor",
    "apply_options",
]

from aretry.retry.config import (
    DEFAULT_BACKOFF_DELAY,
    DEFAULT_MAX_RETRIES,
    RetryConfig,
    apply_options,
)
from aretry.retry.executor import RetryExecutor
from aretry.retry.executor_async import AsyncRetryExecutor
