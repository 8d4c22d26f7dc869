"""Fire-and-forget effects consumed by the checkout workflow.

Neither port returns anything the caller could act on: messages go to a
log sink, background tasks are submitted and never awaited.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable

BackgroundTask = Callable[[], Awaitable[None]]


class Logger(ABC):

    @abstractmethod
    def info(self, message: str) -> None:
        """Record a progress message."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Record a failure message."""


class BackgroundScheduler(ABC):

    @abstractmethod
    def schedule(self, task: BackgroundTask, delay: float = 0.0) -> None:
        """Submit *task* to run after *delay* seconds, without waiting for it.

        Must return immediately. The caller observes neither the result nor
        any exception of *task*.
        """
