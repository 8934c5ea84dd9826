r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how long to wait before the next
    attempt based on the number of attempts already made. Strategies
    must be pure: the same attempt always maps to the same delay.
    """

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the delay to wait before the next attempt.

        Args:
            attempt: The number of attempts already made (1-indexed).
                For example, attempt=1 is the wait before the second
                attempt, attempt=2 the wait before the third one, etc.
                The first attempt is never preceded by a wait.

        Returns:
            The delay in seconds before the next attempt.
        """
