r"""Cancellation contexts for interrupting retry waits.

A context carries a done signal and an error explaining why it is done.
The retry executors only ever observe a context: cancellation is always
triggered by the caller, either explicitly or through a deadline.

Example:
    ```pycon
    >>> from aretry.context import background, with_cancel
    >>> ctx = with_cancel(background())
    >>> ctx.done()
    False
    >>> ctx.cancel()
    >>> ctx.done()
    True
    >>> ctx.error()
    ContextCancelledError('context cancelled')

    ```
"""

from __future__ import annotations

__all__ = [
    "BackgroundContext",
    "BaseContext",
    "CancelContext",
    "DeadlineContext",
    "background",
    "with_cancel",
    "with_deadline",
    "with_timeout",
]

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from aretry.exceptions import ContextCancelledError, ContextError, DeadlineExceededError

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class BaseContext(ABC):
    """Abstract base class for cancellation contexts.

    A context exposes a done signal (``done``, ``wait`` and
    ``add_done_callback``) and the error explaining why it fired
    (``error``). Once done, a context stays done and its error never
    changes.
    """

    @abstractmethod
    def done(self) -> bool:
        """Indicate whether the context has been cancelled.

        Returns:
            ``True`` if the done signal has fired, otherwise ``False``.
        """

    @abstractmethod
    def error(self) -> ContextError | None:
        """Return the reason the context is done.

        Returns:
            The cancellation error, or ``None`` while the context is not done.
        """

    @abstractmethod
    def wait(self, timeout: float | None = None) -> bool:
        """Block until the context is done or the timeout elapses.

        Args:
            timeout: The maximum number of seconds to block. ``None``
                blocks until the context is done.

        Returns:
            ``True`` if the context is done when the call returns.
        """

    @abstractmethod
    def add_done_callback(self, callback: Callable[[BaseContext], None]) -> None:
        """Register a callback invoked once when the context is done.

        The callback is invoked immediately if the context is already done.

        Args:
            callback: The function to call with the context.
        """

    def remove_done_callback(self, callback: Callable[[BaseContext], None]) -> None:  # noqa: B027
        """Unregister a callback previously passed to ``add_done_callback``.

        Contexts that never invoke callbacks can keep this no-op.

        Args:
            callback: The callback to remove.
        """


class BackgroundContext(BaseContext):
    """Context that is never cancelled.

    Use ``background()`` to get the shared instance.
    """

    def __init__(self) -> None:
        self._never = threading.Event()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def done(self) -> bool:
        return False

    def error(self) -> ContextError | None:
        return None

    def wait(self, timeout: float | None = None) -> bool:
        self._never.wait(timeout)
        return False

    def add_done_callback(self, callback: Callable[[BaseContext], None]) -> None:
        pass


class CancelContext(BaseContext):
    """Context cancelled explicitly by calling ``cancel``.

    When a parent context is given, the child is cancelled with the
    parent's error as soon as the parent is done. Leaving a ``with``
    block cancels the context.

    Args:
        parent: Optional parent context to inherit cancellation from.

    Example:
        ```pycon
        >>> from aretry.context import CancelContext
        >>> parent = CancelContext()
        >>> child = CancelContext(parent)
        >>> parent.cancel()
        >>> child.done()
        True
        >>> with CancelContext() as ctx:
        ...     ctx.done()
        ...
        False
        >>> ctx.done()
        True

        ```
    """

    def __init__(self, parent: BaseContext | None = None) -> None:
        self._lock = threading.Lock()
        self._event = threading.Event()
        self._error: ContextError | None = None
        self._callbacks: list[Callable[[BaseContext], None]] = []
        self.parent = parent
        if parent is not None:
            parent.add_done_callback(self._cancel_from_parent)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(done={self.done()})"

    def __enter__(self) -> CancelContext:
        return self

    def __exit__(self, *args: object) -> None:
        self.cancel()

    def done(self) -> bool:
        return self._event.is_set()

    def error(self) -> ContextError | None:
        with self._lock:
            return self._error

    def wait(self, timeout: float | None = None) -> bool:
        return self._event.wait(timeout)

    def add_done_callback(self, callback: Callable[[BaseContext], None]) -> None:
        with self._lock:
            if self._error is None:
                self._callbacks.append(callback)
                return
        callback(self)

    def remove_done_callback(self, callback: Callable[[BaseContext], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def cancel(self, error: ContextError | None = None) -> None:
        """Cancel the context.

        Only the first cancellation is recorded, later calls are no-ops.

        Args:
            error: The reason for the cancellation. Defaults to
                ``ContextCancelledError``.
        """
        self._finish(error if error is not None else ContextCancelledError())

    def _cancel_from_parent(self, parent: BaseContext) -> None:
        self._finish(parent.error() or ContextCancelledError())

    def _finish(self, error: ContextError) -> bool:
        with self._lock:
            if self._error is not None:
                return False
            self._error = error
            callbacks, self._callbacks = self._callbacks, []
            # A finished child no longer needs to hear from its parent
            if self.parent is not None:
                self.parent.remove_done_callback(self._cancel_from_parent)
            self._event.set()
        logger.debug(f"Context done: {error}")
        for callback in callbacks:
            callback(self)
        return True


class DeadlineContext(CancelContext):
    """Context cancelled explicitly or when its deadline passes.

    The deadline is expressed on the ``time.monotonic()`` clock. When it
    passes, the context is done with ``DeadlineExceededError``. The
    internal timer is released as soon as the context is done.

    Args:
        deadline: The ``time.monotonic()`` value at which the context expires.
        parent: Optional parent context to inherit cancellation from.
    """

    def __init__(self, deadline: float, parent: BaseContext | None = None) -> None:
        self._timer: threading.Timer | None = None
        super().__init__(parent)
        self.deadline = deadline
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            self._finish(DeadlineExceededError())
        elif not self.done():
            self._timer = threading.Timer(remaining, self._expire)
            self._timer.daemon = True
            self._timer.start()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(deadline={self.deadline}, done={self.done()})"

    def _expire(self) -> None:
        self._finish(DeadlineExceededError())

    def _finish(self, error: ContextError) -> bool:
        finished = super()._finish(error)
        if finished and self._timer is not None:
            self._timer.cancel()
        return finished


_BACKGROUND = BackgroundContext()


def background() -> BackgroundContext:
    r"""Return the shared context that is never cancelled.

    Returns:
        The background context.

    Example:
        ```pycon
        >>> from aretry.context import background
        >>> background().done()
        False
        >>> background() is background()
        True

        ```
    """
    return _BACKGROUND


def with_cancel(parent: BaseContext | None = None) -> CancelContext:
    r"""Create a context cancelled by calling its ``cancel`` method.

    Args:
        parent: Optional parent context to inherit cancellation from.

    Returns:
        A new cancellable context.
    """
    return CancelContext(parent)


def with_deadline(deadline: float, parent: BaseContext | None = None) -> DeadlineContext:
    r"""Create a context that expires at a given ``time.monotonic()`` value.

    Args:
        deadline: The ``time.monotonic()`` value at which the context expires.
        parent: Optional parent context to inherit cancellation from.

    Returns:
        A new deadline context.
    """
    return DeadlineContext(deadline, parent)


def with_timeout(timeout: float, parent: BaseContext | None = None) -> DeadlineContext:
    r"""Create a context that expires after a number of seconds.

    Args:
        timeout: The number of seconds before the context expires. A
            non-positive value returns an already expired context.
        parent: Optional parent context to inherit cancellation from.

    Returns:
        A new deadline context.

    Example:
        ```pycon
        >>> from aretry.context import with_timeout
        >>> ctx = with_timeout(0)
        >>> ctx.done()
        True
        >>> ctx.error()
        DeadlineExceededError('context deadline exceeded')

        ```
    """
    return DeadlineContext(time.monotonic() + timeout, parent)

