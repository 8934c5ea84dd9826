r"""Shared core logic for retry executors.

This module provides helper functions used by both the synchronous and
asynchronous retry executors. They encapsulate the retry budget, the
wait computation, the observer invocation and the choice of the error
raised when a wait is interrupted.
"""

from __future__ import annotations

__all__ = [
    "compute_wait",
    "has_attempts_left",
    "notify_observer",
    "resolve_interrupted_wait",
]

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aretry.exceptions import ContextError
    from aretry.retry.config import RetryConfig

logger: logging.Logger = logging.getLogger(__name__)


def has_attempts_left(config: RetryConfig, attempt: int) -> bool:
    """Indicate whether another attempt is allowed.

    Args:
        config: Retry configuration containing max_retries.
        attempt: Number of attempts already made.

    Returns:
        ``True`` if the budget is unlimited or not yet exhausted.
    """
    return config.unlimited or attempt < config.max_retries


def compute_wait(config: RetryConfig, attempt: int) -> float:
    """Compute the delay before an attempt.

    Args:
        config: Retry configuration containing the backoff strategy.
        attempt: Number of attempts already made. No wait precedes the
            first attempt, so 0 always maps to 0.

    Returns:
        The delay in seconds. Callers skip the sleep entirely when it is
        not positive.
    """
    if attempt == 0:
        return 0.0
    return config.backoff.calculate(attempt)


def notify_observer(config: RetryConfig, attempt: int, error: Exception | None) -> None:
    """Invoke the on_retry observer if configured.

    Args:
        config: Retry configuration containing on_retry.
        attempt: Number of attempts made before the one that just completed.
            The observer receives it as a 1-indexed value (attempt + 1).
        error: The exception raised by the attempt, or ``None`` on success.
    """
    if config.on_retry is not None:
        config.on_retry(attempt + 1, error)


def resolve_interrupted_wait(
    last_error: Exception | None, context_error: ContextError
) -> Exception:
    """Choose the error raised when a wait is interrupted by the context.

    A failure from a previous attempt takes precedence over the
    cancellation, which is only raised when no attempt failed yet.

    Args:
        last_error: The exception raised by the most recent attempt, if any.
        context_error: The error explaining why the context is done.

    Returns:
        The exception to raise.

    Example:
        ```pycon
        >>> from aretry.exceptions import ContextCancelledError
        >>> from aretry.retry.executor_core import resolve_interrupted_wait
        >>> resolve_interrupted_wait(None, ContextCancelledError())
        ContextCancelledError('context cancelled')
        >>> resolve_interrupted_wait(ValueError("boom"), ContextCancelledError())
        ValueError('boom')

        ```
    """
    if last_error is not None:
        logger.debug(f"Wait interrupted ({context_error}), keeping last error: {last_error!r}")
        return last_error
    logger.debug(f"Wait interrupted ({context_error}) before any failure")
    return context_error
