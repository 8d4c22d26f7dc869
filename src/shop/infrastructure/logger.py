"""Logger capability implementations."""

from __future__ import annotations

from loguru import logger

from shop.domain.ports.effects import Logger


class LoguruLogger(Logger):
    """Forwards checkout messages to loguru, tagged with a component name."""

    def __init__(self, component: str = "checkout") -> None:
        self._logger = logger.bind(component=component)

    def info(self, message: str) -> None:
        self._logger.info(message)

    def error(self, message: str) -> None:
        self._logger.error(message)


class NoOpLogger(Logger):

    def info(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass
