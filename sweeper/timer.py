from __future__ import annotations
import time
from typing import Callable, Optional


class Timer:
    """Stopwatch for the game clock.

    ``stop`` freezes the reading and ``resume`` carries on accumulating from
    it; ``start`` begins again from zero.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._started: Optional[float] = None
        self._excess = 0.0

    def start(self) -> None:
        self._excess = 0.0
        self._started = self.clock()

    def stop(self) -> None:
        if self._started is not None:
            self._excess += self.clock() - self._started
            self._started = None

    def resume(self) -> None:
        if self._started is None:
            self._started = self.clock()

    def reset(self) -> None:
        self._excess = 0.0
        self._started = None

    def elapsed(self) -> float:
        running = self.clock() - self._started if self._started is not None else 0.0
        return self._excess + running

    def elapsed_secs(self) -> int:
        return int(self.elapsed())

    def is_running(self) -> bool:
        return self._started is not None
