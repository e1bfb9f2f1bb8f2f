"""Frame driver: one simulation step per host tick."""

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class FrameDriver:
    """Invokes the step callback once per tick while running.

    The host loop (pygame window, test harness, timer) calls ``tick()``
    once per display refresh. Clearing the running flag is the only way
    to cancel; a step already in progress always completes.
    """

    def __init__(self, step: Callable[[], None]) -> None:
        self._step = step
        self._running = False
        self._ticks = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def ticks(self) -> int:
        """Number of steps executed since the last start."""
        return self._ticks

    def start(self) -> None:
        self._running = True
        self._ticks = 0
        logger.debug("FrameDriver started")

    def stop(self) -> None:
        if self._running:
            self._running = False
            logger.debug(f"FrameDriver stopped after {self._ticks} ticks")

    def tick(self) -> bool:
        """Run one step if running. Returns True if a step was executed."""
        if not self._running:
            return False
        self._ticks += 1
        self._step()
        return True
