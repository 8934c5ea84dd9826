r"""Cancellable sleep primitives.

This module provides functions waiting for a duration or until a
cancellation context is done, whichever comes first. Both return the
context error when the wait was interrupted and ``None`` when the full
duration elapsed.
"""

from __future__ import annotations

__all__ = ["sleep", "sleep_async"]

import asyncio
import logging
import threading
from contextlib import suppress
from typing import TYPE_CHECKING

from aretry.exceptions import ContextCancelledError

if TYPE_CHECKING:
    from aretry.context import BaseContext
    from aretry.exceptions import ContextError

logger: logging.Logger = logging.getLogger(__name__)


def _context_error(ctx: BaseContext) -> ContextError:
    return ctx.error() or ContextCancelledError()


def sleep(ctx: BaseContext, seconds: float) -> ContextError | None:
    """Block for a number of seconds unless the context is done first.

    Args:
        ctx: The cancellation context to watch.
        seconds: The number of seconds to wait. Values larger than
            ``threading.TIMEOUT_MAX`` are clamped.

    Returns:
        The context error if the wait was interrupted, otherwise ``None``.

    Example:
        ```pycon
        >>> from aretry.context import background, with_timeout
        >>> from aretry.utils.sleep import sleep
        >>> sleep(background(), 0.01) is None
        True
        >>> sleep(with_timeout(0), 10.0)
        DeadlineExceededError('context deadline exceeded')

        ```
    """
    if ctx.wait(min(seconds, threading.TIMEOUT_MAX)):
        logger.debug(f"Sleep of {seconds:.2f}s interrupted by context")
        return _context_error(ctx)
    return None


async def sleep_async(ctx: BaseContext, seconds: float) -> ContextError | None:
    """Await a number of seconds unless the context is done first.

    The context may be cancelled from any thread: the done signal is
    delivered to the running event loop with ``call_soon_threadsafe``.
    Cancelling the awaiting task propagates ``asyncio.CancelledError``.

    Args:
        ctx: The cancellation context to watch.
        seconds: The number of seconds to wait.

    Returns:
        The context error if the wait was interrupted, otherwise ``None``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.context import with_timeout
        >>> from aretry.utils.sleep import sleep_async
        >>> asyncio.run(sleep_async(with_timeout(0), 10.0))
        DeadlineExceededError('context deadline exceeded')

        ```
    """
    if ctx.done():
        logger.debug(f"Sleep of {seconds:.2f}s skipped, context already done")
        return _context_error(ctx)

    loop = asyncio.get_running_loop()
    waiter: asyncio.Future[None] = loop.create_future()

    def _release() -> None:
        if not waiter.done():
            waiter.set_result(None)

    def _on_done(_ctx: BaseContext) -> None:
        # The loop may already be closed when the context fires late.
        with suppress(RuntimeError):
            loop.call_soon_threadsafe(_release)

    ctx.add_done_callback(_on_done)
    try:
        await asyncio.wait_for(waiter, timeout=min(seconds, threading.TIMEOUT_MAX))
    except asyncio.TimeoutError:
        return None
    finally:
        ctx.remove_done_callback(_on_done)

    logger.debug(f"Sleep of {seconds:.2f}s interrupted by context")
    return _context_error(ctx)
