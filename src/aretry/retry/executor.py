r"""Synchronous retry executor.

This module provides the RetryExecutor class that invokes a fallible
operation until it succeeds, the retry budget is exhausted, or the
cancellation context interrupts a wait.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
from typing import TYPE_CHECKING, TypeVar

from aretry.retry.config import RetryConfig
from aretry.retry.executor_core import (
    compute_wait,
    has_attempts_left,
    notify_observer,
    resolve_interrupted_wait,
)
from aretry.utils.sleep import sleep

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.context import BaseContext

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Executes a fallible operation with automatic retry logic.

    An attempt fails when the operation raises an ``Exception``. Every
    failure is retried the same way: the executor never inspects the
    exception. Exceptions that are not ``Exception`` subclasses
    (``KeyboardInterrupt``, ``SystemExit``) propagate immediately.

    Attributes:
        config: Retry configuration containing the context, the retry
            budget, the backoff strategy and the observer.

    Example:
        ```pycon
        >>> from aretry.retry import RetryConfig, RetryExecutor
        >>> executor = RetryExecutor(RetryConfig(max_retries=2))
        >>> executor.execute(lambda ctx: "done")
        'done'

        ```
    """

    def __init__(self, config: RetryConfig | None = None) -> None:
        self.config = config if config is not None else RetryConfig()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(config={self.config})"

    def execute(self, operation: Callable[[BaseContext], T]) -> T:
        """Execute the operation with automatic retry logic.

        The first attempt runs immediately. Before every following
        attempt, the executor waits for the delay computed by the backoff
        strategy; a wait is skipped when the delay is not positive. The
        observer is called after every completed attempt, whether it
        failed or not, but never for a wait interrupted by the context.

        Args:
            operation: The function to call. It receives the cancellation
                context and signals failure by raising an exception.

        Returns:
            The value returned by the first successful attempt.

        Raises:
            Exception: The exception raised by the most recent attempt,
                unchanged, when the budget is exhausted or a wait is
                interrupted by the context.
            ContextError: The context error, when a wait is interrupted
                before any attempt failed.
        """
        config = self.config
        attempt = 0
        last_error: Exception | None = None

        while has_attempts_left(config, attempt):
            wait = compute_wait(config, attempt)
            if wait > 0:
                logger.debug(f"Waiting {wait:.2f}s before attempt {attempt + 1}")
                context_error = sleep(config.context, wait)
                if context_error is not None:
                    raise resolve_interrupted_wait(last_error, context_error)

            try:
                result = operation(config.context)
            except Exception as exc:  # noqa: BLE001
                last_error = exc
            else:
                last_error = None

            notify_observer(config, attempt, last_error)
            if last_error is None:
                return result

            logger.debug(f"Attempt {attempt + 1} failed: {last_error!r}")
            attempt += 1

        logger.debug(f"Retry budget exhausted after {attempt} attempts")
        raise last_error
