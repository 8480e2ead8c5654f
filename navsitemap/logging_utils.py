from __future__ import annotations

import logging
from typing import Protocol

from .config import LOG_LEVEL


class WarningSink(Protocol):
    def warning(self, message: str) -> None: ...


class LoggerWarningSink:
    """Sends builder warnings to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("navsitemap.builder")

    def warning(self, message: str) -> None:
        self._logger.warning(message)


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or LOG_LEVEL),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
