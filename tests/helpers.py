r"""Shared test helpers for retry executor tests."""

from __future__ import annotations

__all__ = ["AsyncFlakyOperation", "FlakyOperation", "RecordingBackoff"]

from typing import TYPE_CHECKING

from aretry.backoff import BaseBackoffStrategy

if TYPE_CHECKING:
    from aretry.context import BaseContext


class FlakyOperation:
    """Operation failing a given number of times before succeeding.

    Args:
        failures: Number of calls raising before the first success.
            ``None`` means the operation never succeeds.
        result: Value returned once the operation succeeds.
    """

    def __init__(self, failures: int | None = None, result: object = "ok") -> None:
        self.failures = failures
        self.result = result
        self.calls = 0
        self.errors: list[Exception] = []
        self.contexts: list[BaseContext] = []

    def __call__(self, ctx: BaseContext) -> object:
        self.calls += 1
        self.contexts.append(ctx)
        if self.failures is None or self.calls <= self.failures:
            error = RuntimeError(f"failure {self.calls}")
            self.errors.append(error)
            raise error
        return self.result


class AsyncFlakyOperation(FlakyOperation):
    """Coroutine version of ``FlakyOperation``."""

    async def __call__(self, ctx: BaseContext) -> object:  # type: ignore[override]
        return super().__call__(ctx)


class RecordingBackoff(BaseBackoffStrategy):
    """Backoff strategy recording the attempts it is called with."""

    def __init__(self, delay: float = 1.0) -> None:
        self.delay = delay
        self.attempts: list[int] = []

    def calculate(self, attempt: int) -> float:
        self.attempts.append(attempt)
        return self.delay
