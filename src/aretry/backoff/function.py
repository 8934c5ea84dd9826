r"""Backoff strategy built from a plain function."""

from __future__ import annotations

__all__ = ["FunctionBackoff", "as_backoff_strategy"]

from typing import TYPE_CHECKING

from aretry.backoff.base import BaseBackoffStrategy

if TYPE_CHECKING:
    from collections.abc import Callable


class FunctionBackoff(BaseBackoffStrategy):
    """Backoff strategy delegating to a user-supplied function.

    Args:
        func: A function mapping the number of attempts already made
            to a delay in seconds.

    Example:
        ```pycon
        >>> from aretry.backoff import FunctionBackoff
        >>> backoff = FunctionBackoff(lambda attempt: 0.1 * attempt)
        >>> backoff.calculate(1)
        0.1
        >>> backoff.calculate(3)
        0.30000000000000004

        ```
    """

    def __init__(self, func: Callable[[int], float]) -> None:
        if not callable(func):
            msg = f"func must be callable, got {type(func).__qualname__}"
            raise TypeError(msg)
        self.func = func

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(func={self.func!r})"

    def calculate(self, attempt: int) -> float:
        return self.func(attempt)


def as_backoff_strategy(
    backoff: BaseBackoffStrategy | Callable[[int], float],
) -> BaseBackoffStrategy:
    r"""Convert a backoff strategy or a plain function to a strategy.

    Args:
        backoff: A backoff strategy, returned unchanged, or a function
            mapping the number of attempts already made to a delay in seconds.

    Returns:
        The backoff strategy.

    Raises:
        TypeError: If ``backoff`` is neither a strategy nor callable.

    Example:
        ```pycon
        >>> from aretry.backoff import ConstantBackoff, as_backoff_strategy
        >>> backoff = ConstantBackoff(1.0)
        >>> as_backoff_strategy(backoff) is backoff
        True
        >>> as_backoff_strategy(lambda attempt: 2.0).calculate(4)
        2.0

        ```
    """
    if isinstance(backoff, BaseBackoffStrategy):
        return backoff
    if callable(backoff):
        return FunctionBackoff(backoff)
    msg = f"backoff must be a BaseBackoffStrategy or a callable, got {type(backoff).__qualname__}"
    raise TypeError(msg)
