"""
autosave.py
- Purpose: Debounced persistence for editing surfaces.
- Design: At most one pending timer per key. A new edit inside the quiet
  period cancels and reschedules; once the timer fires the save is in flight
  and is no longer cancelable. Each scheduled save gets a strictly increasing
  sequence number so the store can drop a save that completes out of order.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Hashable
from typing import Any

from idp.core.config import settings

logger = logging.getLogger("idp.autosave")

SaveFn = Callable[[int], Awaitable[Any]]


class DebouncedSaver:
    def __init__(self, delay_seconds: float | None = None):
        self.delay = settings.AUTOSAVE_DEBOUNCE_SECONDS if delay_seconds is None else delay_seconds
        self._pending: dict[Hashable, tuple[asyncio.Task, SaveFn, int]] = {}
        self._last_seq = 0

    def next_seq(self) -> int:
        # wall-clock based so sequences keep increasing across sessions
        self._last_seq = max(self._last_seq + 1, time.time_ns())
        return self._last_seq

    def is_pending(self, key: Hashable) -> bool:
        entry = self._pending.get(key)
        return entry is not None and not entry[0].done()

    def has_pending(self) -> bool:
        return any(not task.done() for task, _, _ in self._pending.values())

    def schedule(self, key: Hashable, save: SaveFn) -> asyncio.Task:
        """(Re)start the quiet period for `key`; `save(seq)` runs when it ends."""
        self._cancel(key)
        seq = self.next_seq()
        task = asyncio.get_running_loop().create_task(self._run_later(key, save, seq))
        self._pending[key] = (task, save, seq)
        return task

    async def _run_later(self, key: Hashable, save: SaveFn, seq: int) -> Any:
        await asyncio.sleep(self.delay)
        entry = self._pending.get(key)
        if entry is not None and entry[0] is asyncio.current_task():
            del self._pending[key]
        return await save(seq)

    async def flush(self, key: Hashable) -> Any:
        """Run a pending save for `key` now instead of waiting out the quiet period."""
        entry = self._pending.pop(key, None)
        if entry is None:
            return None
        task, save, seq = entry
        task.cancel()
        return await save(seq)

    async def flush_all(self) -> None:
        for key in list(self._pending):
            await self.flush(key)

    def _cancel(self, key: Hashable) -> None:
        entry = self._pending.pop(key, None)
        if entry is not None and not entry[0].done():
            entry[0].cancel()

    def cancel_all(self) -> None:
        for key in list(self._pending):
            self._cancel(key)
