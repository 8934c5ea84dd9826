r"""Configuration dataclass and defaults for the retry executors.

This module provides the default retry budget and backoff delay, and
the immutable configuration object consumed by the retry executors.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_DELAY",
    "DEFAULT_MAX_RETRIES",
    "RetryConfig",
    "apply_options",
]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from aretry.backoff import BaseBackoffStrategy, ConstantBackoff, as_backoff_strategy
from aretry.context import BaseContext, background

if TYPE_CHECKING:
    from collections.abc import Callable


# Default maximum number of attempts, including the first one
# 0 means the operation is attempted until it succeeds
DEFAULT_MAX_RETRIES = 3

# Default delay in seconds between two attempts (constant backoff)
DEFAULT_BACKOFF_DELAY = 3.0


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior.

    The configuration is immutable: use ``merge`` or option functions to
    derive a new one.

    Args:
        context: Cancellation context watched during the waits between
            attempts and passed to the operation (default: background).
        max_retries: Maximum number of attempts. Must be >= 0. A value
            of 0 means unlimited attempts.
        backoff: Backoff strategy, or a plain function mapping the number
            of attempts already made to a delay in seconds
            (default: constant 3 seconds).
        on_retry: Optional observer called after every attempt with the
            attempt number (1-indexed) and the exception raised by the
            attempt, or ``None`` if it succeeded.

    Example:
        ```pycon
        >>> from aretry.retry import RetryConfig
        >>> config = RetryConfig()  # Use defaults
        >>> config.max_retries
        3
        >>> config.backoff
        ConstantBackoff(delay=3.0)
        >>> config = RetryConfig(max_retries=0)  # Retry until success
        >>> config.max_retries
        0

        ```
    """

    context: BaseContext = field(default_factory=background)
    max_retries: int = DEFAULT_MAX_RETRIES
    backoff: BaseBackoffStrategy = field(
        default_factory=lambda: ConstantBackoff(DEFAULT_BACKOFF_DELAY)
    )
    on_retry: Callable[[int, Exception | None], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If max_retries is negative.
            TypeError: If context, backoff or on_retry have an invalid type.
        """
        if not isinstance(self.context, BaseContext):
            msg = f"context must be a BaseContext, got {type(self.context).__qualname__}"
            raise TypeError(msg)
        if self.max_retries < 0:
            msg = f"max_retries must be >= 0, got {self.max_retries}"
            raise ValueError(msg)
        if self.on_retry is not None and not callable(self.on_retry):
            msg = f"on_retry must be callable, got {type(self.on_retry).__qualname__}"
            raise TypeError(msg)
        # Plain functions are accepted as backoff strategies
        object.__setattr__(self, "backoff", as_backoff_strategy(self.backoff))

    @property
    def unlimited(self) -> bool:
        """Indicate whether the number of attempts is unbounded."""
        return self.max_retries == 0

    def merge(self, **overrides: Any) -> RetryConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new RetryConfig instance with overrides applied.

        Example:
            ```pycon
            >>> from aretry.retry import RetryConfig
            >>> config = RetryConfig(max_retries=3)
            >>> new_config = config.merge(max_retries=5)
            >>> new_config.max_retries
            5
            >>> config.max_retries  # Original unchanged
            3

            ```
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)


def apply_options(
    config: RetryConfig | None = None,
    *options: Callable[[RetryConfig], RetryConfig],
) -> RetryConfig:
    r"""Apply option functions to a configuration, in order.

    Later options win over earlier ones when they set the same field.

    Args:
        config: The configuration to start from. Defaults to
            ``RetryConfig()``.
        *options: Functions deriving a new configuration from a
            configuration, typically created with ``aretry.options``.

    Returns:
        The resulting configuration.

    Example:
        ```pycon
        >>> from aretry.options import max_retries
        >>> from aretry.retry import apply_options
        >>> apply_options(None, max_retries(5), max_retries(0)).max_retries
        0

        ```
    """
    if config is None:
        config = RetryConfig()
    for option in options:
        config = option(config)
    return config
