r"""Option functions for building a retry configuration.

Each function returns an option: a callable deriving a new
``RetryConfig`` from an existing one. Options are applied in order by
``execute``, ``execute_async`` and ``retryable``, so the last option wins
when two of them set the same field.

Example:
    ```pycon
    >>> from aretry.backoff import ExponentialBackoff
    >>> from aretry.options import max_retries, with_backoff
    >>> from aretry.retry import apply_options
    >>> config = apply_options(None, max_retries(5), with_backoff(ExponentialBackoff(0.1)))
    >>> config.max_retries
    5
    >>> config.backoff
    ExponentialBackoff(base_delay=0.1, max_delay=None)

    ```
"""

from __future__ import annotations

__all__ = ["Option", "max_retries", "on_retry", "with_backoff", "with_context"]

from collections.abc import Callable
from dataclasses import replace
from typing import TYPE_CHECKING

from aretry.retry.config import RetryConfig

if TYPE_CHECKING:
    from aretry.backoff import BaseBackoffStrategy
    from aretry.context import BaseContext

Option = Callable[[RetryConfig], RetryConfig]


def with_context(ctx: BaseContext) -> Option:
    r"""Set the cancellation context.

    Args:
        ctx: The context watched during waits and passed to the operation.

    Returns:
        The option.
    """

    def apply(config: RetryConfig) -> RetryConfig:
        return replace(config, context=ctx)

    return apply


def max_retries(value: int) -> Option:
    r"""Set the maximum number of attempts.

    Args:
        value: The maximum number of attempts. Must be >= 0. A value of
            0 means unlimited attempts.

    Returns:
        The option.

    Raises:
        ValueError: When the option is applied, if ``value`` is negative.
    """

    def apply(config: RetryConfig) -> RetryConfig:
        return replace(config, max_retries=value)

    return apply


def with_backoff(backoff: BaseBackoffStrategy | Callable[[int], float]) -> Option:
    r"""Set the backoff strategy.

    Args:
        backoff: A backoff strategy, or a function mapping the number of
            attempts already made to a delay in seconds.

    Returns:
        The option.
    """

    def apply(config: RetryConfig) -> RetryConfig:
        return replace(config, backoff=backoff)

    return apply


def on_retry(callback: Callable[[int, Exception | None], None]) -> Option:
    r"""Set the observer called after every attempt.

    Args:
        callback: A function called with the attempt number (1-indexed)
            and the exception raised by the attempt, or ``None`` if it
            succeeded.

    Returns:
        The option.
    """

    def apply(config: RetryConfig) -> RetryConfig:
        return replace(config, on_retry=callback)

    return apply
