r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["MAX_EXPONENT", "ExponentialBackoff"]

from aretry.backoff.base import BaseBackoffStrategy

# Largest power of two applied to the base delay. Past this point the
# delay saturates instead of growing, so very long unbounded retry loops
# never overflow.
MAX_EXPONENT = 62


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as: base_delay * 2 ** (attempt - 1), with optional max_delay cap.
    The first wait is base_delay and it doubles before every following attempt.

    Args:
        base_delay: The delay in seconds before the second attempt (default: 1.0).
        max_delay: Optional maximum delay cap in seconds. If specified,
            delays will not exceed this value.

    Example:
        ```pycon
        >>> from aretry.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(base_delay=0.5)
        >>> backoff.calculate(1)  # Before the second attempt
        0.5
        >>> backoff.calculate(2)
        1.0
        >>> backoff.calculate(3)
        2.0
        >>> # With max_delay cap
        >>> backoff = ExponentialBackoff(base_delay=1.0, max_delay=5.0)
        >>> backoff.calculate(11)  # Would be 1024.0, but capped
        5.0

        ```
    """

    def __init__(self, base_delay: float = 1.0, max_delay: float | None = None) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)

        self.base_delay = base_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"max_delay={self.max_delay})"
        )

    def calculate(self, attempt: int) -> float:
        """Calculate exponential backoff delay.

        Args:
            attempt: The number of attempts already made (1-indexed).

        Returns:
            The calculated delay: base_delay * 2 ** (attempt - 1),
            capped at max_delay if set.
        """
        exponent = min(max(attempt - 1, 0), MAX_EXPONENT)
        delay = self.base_delay * (2**exponent)
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
