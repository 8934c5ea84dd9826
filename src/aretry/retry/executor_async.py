r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that awaits a
fallible coroutine function until it succeeds, the retry budget is
exhausted, or the cancellation context interrupts a wait.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import logging
from typing import TYPE_CHECKING, TypeVar

from aretry.retry.config import RetryConfig
from aretry.retry.executor_core import (
    compute_wait,
    has_attempts_left,
    notify_observer,
    resolve_interrupted_wait,
)
from aretry.utils.sleep import sleep_async

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.context import BaseContext

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor:
    """Executes a fallible coroutine function with automatic retry logic.

    This is the asyncio counterpart of ``RetryExecutor``, with the same
    attempt loop. The waits between attempts let other tasks run and are
    interrupted as soon as the context is done, even when it is cancelled
    from another thread. Cancelling the task running the executor
    propagates ``asyncio.CancelledError`` without any retry.

    Attributes:
        config: Retry configuration containing the context, the retry
            budget, the backoff strategy and the observer.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.retry import AsyncRetryExecutor, RetryConfig
        >>>
        >>> async def fetch(ctx):
        ...     return "done"
        ...
        >>> asyncio.run(AsyncRetryExecutor(RetryConfig()).execute(fetch))
        'done'

        ```
    """

    def __init__(self, config: RetryConfig | None = None) -> None:
        self.config = config if config is not None else RetryConfig()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(config={self.config})"

    async def execute(self, operation: Callable[[BaseContext], Awaitable[T]]) -> T:
        """Execute the coroutine function with automatic retry logic.

        Args:
            operation: The coroutine function to await. It receives the
                cancellation context and signals failure by raising an
                exception.

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
                context_error = await sleep_async(config.context, wait)
                if context_error is not None:
                    raise resolve_interrupted_wait(last_error, context_error)

            try:
                result = await operation(config.context)
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
