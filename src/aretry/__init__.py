r"""aretry - Retry with backoff for fallible operations.

This package calls an unreliable operation (network call, I/O, ...)
repeatedly until it succeeds, a retry budget is exhausted, or an
external cancellation context interrupts the wait between attempts.

Key Features:
    - Retry budget with 0 meaning unlimited attempts
    - Constant and exponential backoff strategies, or any custom function
    - Cancellation contexts with explicit cancel, timeout and deadline
    - Per-attempt observer callback
    - Synchronous and asyncio executors, and a decorator
    - The last exception of the operation is re-raised unchanged

Example:
    ```pycon
    >>> from aretry import execute
    >>> from aretry.backoff import ExponentialBackoff
    >>> from aretry.context import with_timeout
    >>> from aretry.options import max_retries, with_backoff, with_context
    >>> def fetch(ctx):
    ...     return "data"
    ...
    >>> execute(fetch)
    'data'
    >>> with with_timeout(30.0) as ctx:
    ...     execute(
    ...         fetch,
    ...         with_context(ctx),
    ...         max_retries(0),
    ...         with_backoff(ExponentialBackoff(base_delay=0.5, max_delay=10.0)),
    ...     )
    ...
    'data'

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "ContextCancelledError",
    "ContextError",
    "DeadlineExceededError",
    "RetryConfig",
    "RetryExecutor",
    "__version__",
    "execute",
    "execute_async",
    "retryable",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.exceptions import ContextCancelledError, ContextError, DeadlineExceededError
from aretry.execute import execute, execute_async, retryable
from aretry.retry import AsyncRetryExecutor, RetryConfig, RetryExecutor

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
