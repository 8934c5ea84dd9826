r"""Entry points running an operation with automatic retry.

This module provides ``execute`` and ``execute_async``, which build a
configuration from option functions and run the matching retry
executor, and the ``retryable`` decorator.
"""

from __future__ import annotations

__all__ = ["execute", "execute_async", "retryable"]

import functools
import inspect
from typing import TYPE_CHECKING, Any, TypeVar

from aretry.retry import AsyncRetryExecutor, RetryExecutor, apply_options

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.context import BaseContext
    from aretry.options import Option
    from aretry.retry import RetryConfig

T = TypeVar("T")


def execute(
    operation: Callable[[BaseContext], T],
    *options: Option,
    config: RetryConfig | None = None,
) -> T:
    r"""Call an operation until it succeeds, with backoff between attempts.

    The operation is retried on any exception until the retry budget is
    exhausted (3 attempts by default) or the cancellation context
    interrupts a wait. Consecutive attempts are separated by the delay of
    the backoff strategy (3 seconds by default).

    Args:
        operation: The function to call. It receives the cancellation
            context and signals failure by raising an exception.
        *options: Option functions from ``aretry.options``, applied in
            order on top of ``config``.
        config: Optional base configuration. Defaults to ``RetryConfig()``.

    Returns:
        The value returned by the first successful attempt.

    Raises:
        Exception: The exception raised by the most recent attempt,
            unchanged, when the budget is exhausted or a wait is
            interrupted by the context.
        ContextError: The context error, when a wait is interrupted
            before any attempt failed.

    Example:
        ```pycon
        >>> from aretry import execute
        >>> from aretry.options import max_retries, with_backoff
        >>> calls = []
        >>> def flaky(ctx):
        ...     calls.append(1)
        ...     if len(calls) < 3:
        ...         raise ConnectionError("unavailable")
        ...     return "ok"
        ...
        >>> execute(flaky, max_retries(5), with_backoff(lambda attempt: 0.0))
        'ok'
        >>> len(calls)
        3

        ```
    """
    return RetryExecutor(apply_options(config, *options)).execute(operation)


async def execute_async(
    operation: Callable[[BaseContext], Awaitable[T]],
    *options: Option,
    config: RetryConfig | None = None,
) -> T:
    r"""Await a coroutine function until it succeeds, with backoff between attempts.

    This is the asyncio counterpart of ``execute``.

    Args:
        operation: The coroutine function to await. It receives the
            cancellation context and signals failure by raising an
            exception.
        *options: Option functions from ``aretry.options``, applied in
            order on top of ``config``.
        config: Optional base configuration. Defaults to ``RetryConfig()``.

    Returns:
        The value returned by the first successful attempt.

    Raises:
        Exception: The exception raised by the most recent attempt,
            unchanged, when the budget is exhausted or a wait is
            interrupted by the context.
        ContextError: The context error, when a wait is interrupted
            before any attempt failed.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry import execute_async
        >>> async def ping(ctx):
        ...     return "pong"
        ...
        >>> asyncio.run(execute_async(ping))
        'pong'

        ```
    """
    return await AsyncRetryExecutor(apply_options(config, *options)).execute(operation)


def retryable(
    *options: Option, config: RetryConfig | None = None
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    r"""Decorate a function so every call is retried.

    The decorated function receives the cancellation context as its
    first argument, followed by the arguments of the call. Coroutine
    functions are run by the asynchronous executor.

    Args:
        *options: Option functions from ``aretry.options``, applied in
            order on top of ``config``.
        config: Optional base configuration. Defaults to ``RetryConfig()``.

    Returns:
        The decorator.

    Example:
        ```pycon
        >>> from aretry import retryable
        >>> from aretry.options import max_retries
        >>> @retryable(max_retries(2))
        ... def add(ctx, a, b):
        ...     return a + b
        ...
        >>> add(1, 2)
        3

        ```
    """
    resolved = apply_options(config, *options)

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                return await AsyncRetryExecutor(resolved).execute(
                    lambda ctx: func(ctx, *args, **kwargs)
                )

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return RetryExecutor(resolved).execute(lambda ctx: func(ctx, *args, **kwargs))

        return wrapper

    return decorator
