r"""Exceptions raised by cancellation contexts.

Errors raised by the retried operation are never wrapped: the executor
re-raises the exact exception object produced by the last attempt. The
classes below only describe why a cancellation context is done.
"""

from __future__ import annotations

__all__ = ["ContextCancelledError", "ContextError", "DeadlineExceededError"]


class ContextError(Exception):
    """Base class for errors explaining why a context is done."""


class ContextCancelledError(ContextError):
    """Raised when a context was explicitly cancelled.

    Example:
        ```pycon
        >>> from aretry.exceptions import ContextCancelledError
        >>> str(ContextCancelledError())
        'context cancelled'

        ```
    """

    def __init__(self, message: str = "context cancelled") -> None:
        super().__init__(message)


class DeadlineExceededError(ContextCancelledError):
    """Raised when a context deadline passed before it was cancelled.

    Example:
        ```pycon
        >>> from aretry.exceptions import ContextCancelledError, DeadlineExceededError
        >>> exc = DeadlineExceededError()
        >>> str(exc)
        'context deadline exceeded'
        >>> isinstance(exc, ContextCancelledError)
        True

        ```
    """

    def __init__(self, message: str = "context deadline exceeded") -> None:
        super().__init__(message)
