"""BackgroundScheduler implementations."""

from __future__ import annotations

import asyncio

from loguru import logger

from shop.domain.ports.effects import BackgroundScheduler, BackgroundTask


class AsyncioBackground(BackgroundScheduler):
    """Runs each task as a detached asyncio task on the running loop.

    Strong references to pending tasks are kept until they finish, otherwise
    the event loop may garbage-collect them mid-flight.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def schedule(self, task: BackgroundTask, delay: float = 0.0) -> None:
        running = asyncio.get_running_loop().create_task(self._run(task, delay))
        self._tasks.add(running)
        running.add_done_callback(self._tasks.discard)

    async def shutdown(self) -> int:
        """Cancel every pending task and return how many were dropped."""
        dropped = len(self._tasks)
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        if dropped:
            logger.warning("Dropped {} pending background task(s) at shutdown", dropped)
        return dropped

    @staticmethod
    async def _run(task: BackgroundTask, delay: float) -> None:
        if delay > 0:
            await asyncio.sleep(delay)
        try:
            await task()
        except Exception:
            logger.exception("Background task failed")


class NoOpBackground(BackgroundScheduler):
    """Accepts tasks and never runs them."""

    def schedule(self, task: BackgroundTask, delay: float = 0.0) -> None:
        pass
