"""Terminal output for intermediate and final boards."""

from __future__ import annotations

import sys
import time
from typing import Callable, Optional, TextIO

from tilecollapse.core.grid import Grid

CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"


def render_grid(grid: Grid, placeholder: str = ".") -> str:
    return "\n".join("".join(row) for row in grid.snapshot(placeholder))


class TerminalRenderer:
    """Solver notification sink that redraws the board in place.

    Frames arriving less than ``min_interval`` seconds after the last drawn
    one are dropped; ``delay`` pauses after each drawn frame so the search
    can be watched.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        min_interval: float = 0.0,
        delay: float = 0.0,
        clear: bool = True,
        placeholder: str = ".",
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.stream = stream if stream is not None else sys.stdout
        self.min_interval = min_interval
        self.delay = delay
        self.clear = clear
        self.placeholder = placeholder
        self._clock = clock
        self._sleep = sleep
        self._last: Optional[float] = None
        self.frames = 0

    def __call__(self, grid: Grid) -> None:
        now = self._clock()
        if self._last is not None and now - self._last < self.min_interval:
            return
        self._draw(grid)
        self._last = now
        if self.delay > 0:
            self._sleep(self.delay)

    def final(self, grid: Grid) -> None:
        self._draw(grid)

    def _draw(self, grid: Grid) -> None:
        if self.clear:
            self.stream.write(CLEAR_SCREEN)
        self.stream.write(render_grid(grid, self.placeholder))
        self.stream.write("\n")
        self.stream.flush()
        self.frames += 1
