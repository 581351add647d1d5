"""Single timer facility for retries and polling."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Set

logger = logging.getLogger(__name__)

Callback = Callable[[], Awaitable[object]]


class Scheduler:
    """Runs coroutine callbacks after a delay on the running event loop.

    Every timer and every task it spawns is tracked, so ``shutdown`` leaves
    no orphaned callbacks behind.
    """

    def __init__(self) -> None:
        self._handles: Set[asyncio.TimerHandle] = set()
        self._tasks: Set[asyncio.Task] = set()

    def call_later(self, delay: float, callback: Callback) -> asyncio.TimerHandle:
        loop = asyncio.get_running_loop()
        handle: asyncio.TimerHandle

        def fire() -> None:
            self._handles.discard(handle)
            task = loop.create_task(callback())
            self._tasks.add(task)
            task.add_done_callback(self._task_done)

        handle = loop.call_later(delay, fire)
        self._handles.add(handle)
        return handle

    def cancel(self, handle) -> None:
        if handle is None:
            return
        handle.cancel()
        self._handles.discard(handle)

    def shutdown(self) -> None:
        for handle in list(self._handles):
            handle.cancel()
        self._handles.clear()
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Scheduled callback failed", exc_info=exc)


__all__ = ["Scheduler"]
