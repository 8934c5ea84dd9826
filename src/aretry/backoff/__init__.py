r"""Backoff strategies for computing the wait between attempts.

This package provides the constant and exponential backoff strategies
and an adapter turning any plain function into a strategy.
"""

from __future__ import annotations

__all__ = [
    "BaseBackoffStrategy",
    "ConstantBackoff",
    "ExponentialBackoff",
    "FunctionBackoff",
    "as_backoff_strategy",
]

from aretry.backoff.base import BaseBackoffStrategy
from aretry.backoff.constant import ConstantBackoff
from aretry.backoff.exponential import ExponentialBackoff
from aretry.backoff.function import FunctionBackoff, as_backoff_strategy
