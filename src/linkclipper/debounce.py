"""Debounced, cancellable tasks keyed by document identity."""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class DocumentState(str, Enum):
    IDLE = "idle"
    DEBOUNCED = "debounced"
    PROCESSING = "processing"


class DebouncedTasks:
    """One pending delayed task per key; a newer schedule replaces it.

    Only the waiting phase can be cancelled. Once the delay has elapsed and
    the task is running, later schedules for the same key arm a fresh timer
    without touching the running one.
    """

    def __init__(self, delay: float):
        self.delay = delay
        self._pending: dict[str, asyncio.Task] = {}
        self._running: dict[str, set[asyncio.Task]] = {}

    def schedule(self, key: str, factory: Callable[[], Awaitable[object]]) -> asyncio.Task:
        """Arm a timer for key, cancelling any timer still waiting."""
        previous = self._pending.pop(key, None)
        if previous is not None and not previous.done():
            previous.cancel()
            logger.debug("Superseded pending task for %s", key)

        task = asyncio.ensure_future(self._run(key, factory))
        self._pending[key] = task
        return task

    async def _run(self, key: str, factory: Callable[[], Awaitable[object]]) -> object:
        await asyncio.sleep(self.delay)

        task = asyncio.current_task()
        if self._pending.get(key) is task:
            del self._pending[key]
        running = self._running.setdefault(key, set())
        running.add(task)
        try:
            return await factory()
        finally:
            running.discard(task)
            if not running:
                self._running.pop(key, None)

    def state(self, key: str) -> DocumentState:
        if self._running.get(key):
            return DocumentState.PROCESSING
        if key in self._pending:
            return DocumentState.DEBOUNCED
        return DocumentState.IDLE

    def cancel_all(self) -> None:
        """Cancel every timer that has not fired yet."""
        for task in self._pending.values():
            task.cancel()
        self._pending.clear()

    async def wait(self) -> None:
        """Wait for all pending and running tasks to finish."""
        while True:
            tasks = list(self._pending.values())
            for running in self._running.values():
                tasks.extend(running)
            if not tasks:
                return
            await asyncio.gather(*tasks, return_exceptions=True)
