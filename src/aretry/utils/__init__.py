r"""Utility functions shared by the retry executors."""

from __future__ import annotations

__all__ = ["sleep", "sleep_async"]

from aretry.utils.sleep import sleep, sleep_async
