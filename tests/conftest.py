from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock, patch

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch the cancellable sleep of the synchronous executor to make
    tests run faster."""
    with patch("aretry.retry.executor.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_asleep() -> Generator[AsyncMock, None, None]:
    """Patch the cancellable sleep of the asynchronous executor to make
    tests run faster."""
    with patch(
        "aretry.retry.executor_async.sleep_async", new_callable=AsyncMock, return_value=None
    ) as mock:
        yield mock


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing the on_retry observer.

    Returns:
        A Mock object that can be used as a callback function.
    """
    return Mock()
