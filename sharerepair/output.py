"""Progress and message sinks for repair steps."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from tqdm import tqdm

logger = logging.getLogger(__name__)


class RepairOutput(Protocol):
    def info(self, message: str) -> None:
        """Report an informational message."""

    def warning(self, message: str) -> None:
        """Report a warning."""

    def start_progress(self, total: int = 0) -> None:
        """Begin reporting progress over ``total`` units of work."""

    def advance(self, step: int = 1, description: str = "") -> None:
        """Advance progress by ``step`` units."""

    def finish_progress(self) -> None:
        """Stop reporting progress."""


class ConsoleOutput(RepairOutput):
    """Messages go to the log, progress to a tqdm bar on stderr."""

    def __init__(self, show_progress: bool = True) -> None:
        self._show_progress = show_progress
        self._bar: Optional[tqdm] = None

    def info(self, message: str) -> None:
        logger.info(message)

    def warning(self, message: str) -> None:
        logger.warning(message)

    def start_progress(self, total: int = 0) -> None:
        self.finish_progress()
        self._bar = tqdm(total=total or None, disable=not self._show_progress, unit="share")

    def advance(self, step: int = 1, description: str = "") -> None:
        if self._bar is None:
            return
        if description:
            self._bar.set_description(description)
        self._bar.update(step)

    def finish_progress(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None
