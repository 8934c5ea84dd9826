r"""Unit tests for cancellation contexts."""

from __future__ import annotations

import threading
import time
from unittest.mock import Mock

import pytest

from aretry import execute
from aretry.context import (
    BackgroundContext,
    BaseContext,
    CancelContext,
    DeadlineContext,
    background,
    with_cancel,
    with_deadline,
    with_timeout,
)
from aretry.exceptions import ContextCancelledError, DeadlineExceededError
from aretry.options import with_context

################################
#     Tests for background     #
################################


def test_background_is_singleton() -> None:
    assert background() is background()
    assert isinstance(background(), BackgroundContext)
    assert isinstance(background(), BaseContext)


def test_background_never_done() -> None:
    ctx = background()
    assert not ctx.done()
    assert ctx.error() is None
    assert not ctx.wait(0.01)


def test_background_callbacks_never_called() -> None:
    callback = Mock()
    background().add_done_callback(callback)
    background().remove_done_callback(callback)
    callback.assert_not_called()


#################################
#     Tests for with_cancel     #
#################################


def test_with_cancel_initial_state() -> None:
    ctx = with_cancel()
    assert isinstance(ctx, CancelContext)
    assert not ctx.done()
    assert ctx.error() is None
    assert not ctx.wait(0)


def test_with_cancel_cancel() -> None:
    ctx = with_cancel()
    ctx.cancel()
    assert ctx.done()
    assert ctx.wait(0)
    assert isinstance(ctx.error(), ContextCancelledError)
    assert str(ctx.error()) == "context cancelled"


def test_with_cancel_first_cancel_wins() -> None:
    ctx = with_cancel()
    ctx.cancel()
    error = ctx.error()
    ctx.cancel(DeadlineExceededError())
    assert ctx.error() is error


def test_with_cancel_custom_error() -> None:
    ctx = with_cancel()
    error = ContextCancelledError("shutting down")
    ctx.cancel(error)
    assert ctx.error() is error


def test_with_cancel_callbacks() -> None:
    ctx = with_cancel()
    callback = Mock()
    ctx.add_done_callback(callback)
    callback.assert_not_called()
    ctx.cancel()
    ctx.cancel()
    callback.assert_called_once_with(ctx)


def test_with_cancel_callback_after_done() -> None:
    ctx = with_cancel()
    ctx.cancel()
    callback = Mock()
    ctx.add_done_callback(callback)
    callback.assert_called_once_with(ctx)


def test_with_cancel_remove_callback() -> None:
    ctx = with_cancel()
    callback = Mock()
    ctx.add_done_callback(callback)
    ctx.remove_done_callback(callback)
    ctx.remove_done_callback(callback)
    ctx.cancel()
    callback.assert_not_called()


def test_with_cancel_parent_propagates() -> None:
    parent = with_cancel()
    child = with_cancel(parent)
    grandchild = with_cancel(child)
    parent.cancel()
    assert child.done()
    assert grandchild.done()
    assert child.error() is parent.error()
    assert grandchild.error() is parent.error()


def test_with_cancel_child_does_not_cancel_parent() -> None:
    parent = with_cancel()
    child = with_cancel(parent)
    child.cancel()
    assert child.done()
    assert not parent.done()


def test_with_cancel_finished_child_released_by_parent() -> None:
    parent = with_cancel()
    for _ in range(100):
        with with_cancel(parent):
            pass
    assert parent._callbacks == []
    assert not parent.done()


def test_with_cancel_unfinished_child_kept_by_parent() -> None:
    parent = with_cancel()
    child = with_cancel(parent)
    assert len(parent._callbacks) == 1
    parent.cancel()
    assert child.done()


def test_with_cancel_parent_already_done() -> None:
    parent = with_cancel()
    parent.cancel()
    assert with_cancel(parent).done()


def test_with_cancel_context_manager() -> None:
    with with_cancel() as ctx:
        assert not ctx.done()
    assert ctx.done()


def test_with_cancel_wait_released_from_other_thread() -> None:
    ctx = with_cancel()
    timer = threading.Timer(0.05, ctx.cancel)
    timer.start()
    try:
        assert ctx.wait(5.0)
    finally:
        timer.cancel()


##########################################
#     Tests for with_timeout/deadline    #
##########################################


def test_with_timeout_expires() -> None:
    ctx = with_timeout(0.05)
    assert isinstance(ctx, DeadlineContext)
    assert not ctx.done()
    assert ctx.wait(5.0)
    assert isinstance(ctx.error(), DeadlineExceededError)


@pytest.mark.parametrize("timeout", [0, -1.0])
def test_with_timeout_non_positive(timeout: float) -> None:
    ctx = with_timeout(timeout)
    assert ctx.done()
    assert isinstance(ctx.error(), DeadlineExceededError)


def test_with_timeout_cancel_before_deadline() -> None:
    ctx = with_timeout(10.0)
    ctx.cancel()
    assert type(ctx.error()) is ContextCancelledError
    assert ctx._timer.finished.is_set()


def test_with_timeout_context_manager() -> None:
    with with_timeout(10.0) as ctx:
        assert not ctx.done()
    assert type(ctx.error()) is ContextCancelledError


def test_with_timeout_finished_child_released_by_parent() -> None:
    parent = with_cancel()
    for _ in range(100):
        with with_timeout(60.0, parent) as ctx:
            assert execute(lambda c: "ok", with_context(ctx)) == "ok"
    assert parent._callbacks == []
    assert not parent.done()


def test_with_timeout_expired_child_released_by_parent() -> None:
    parent = with_cancel()
    child = with_timeout(0.05, parent)
    assert child.wait(5.0)
    assert parent._callbacks == []


def test_with_timeout_parent_cancelled() -> None:
    parent = with_cancel()
    ctx = with_timeout(10.0, parent)
    parent.cancel()
    assert type(ctx.error()) is ContextCancelledError


def test_with_timeout_parent_deadline() -> None:
    parent = with_timeout(0.05)
    child = with_cancel(parent)
    assert child.wait(5.0)
    assert isinstance(child.error(), DeadlineExceededError)


def test_with_deadline() -> None:
    deadline = time.monotonic() + 10.0
    ctx = with_deadline(deadline)
    assert ctx.deadline == deadline
    assert not ctx.done()
    ctx.cancel()


def test_with_deadline_in_the_past() -> None:
    assert with_deadline(time.monotonic() - 1.0).done()
