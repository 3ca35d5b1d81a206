"""Backtracking collapse: entropy-guided choice, forward checking, chronological undo."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .grid import Grid, Modification
from .model import AdjacencyRules, Position

log = logging.getLogger(__name__)

Renderer = Callable[[Grid], None]


@dataclass
class SolveStats:
    placements: int = 0
    backtracks: int = 0
    deadlocks: int = 0
    max_depth: int = 0
    elapsed: float = 0.0
    aborted: bool = False


@dataclass
class _ChoicePoint:
    """One level of the search: a cell and the candidates left to try there."""
    pos: Position
    saved_domain: List[str]
    candidates: List[str]
    undo: Optional[List[Modification]] = None
    next_index: int = 0


class Solver:
    """Depth-first search over a grid, kept on an explicit stack.

    Choice points are pushed on descent and popped (with their placement
    reverted) on failure, which visits cells and candidates in the same
    order as the recursive formulation would.
    """

    def __init__(
        self,
        rules: AdjacencyRules,
        rng: random.Random | None = None,
        renderer: Renderer | None = None,
        node_limit: int | None = None,
    ):
        self.rules = rules
        self.rng = rng if rng is not None else random.Random()
        self.renderer = renderer
        self.node_limit = node_limit or None
        self.stats = SolveStats()

    def run(self, grid: Grid) -> bool:
        """Collapse ``grid`` in place. Returns False if the search is exhausted."""
        self.stats = SolveStats()
        started = time.perf_counter()
        try:
            ok = self._search(grid)
        finally:
            self.stats.elapsed = time.perf_counter() - started
        self._notify(grid)
        log.info(
            "solve %dx%d %s: placements=%d backtracks=%d deadlocks=%d max_depth=%d in %.3fs",
            grid.rows, grid.cols,
            "solved" if ok else ("aborted" if self.stats.aborted else "exhausted"),
            self.stats.placements, self.stats.backtracks, self.stats.deadlocks,
            self.stats.max_depth, self.stats.elapsed,
        )
        return ok

    def _push(self, grid: Grid, stack: List[_ChoicePoint]) -> None:
        pos = grid.lowest_entropy_position()
        domain = grid.domain(pos)
        candidates = list(domain)
        self.rng.shuffle(candidates)
        stack.append(_ChoicePoint(pos, list(domain), candidates))
        if len(stack) > self.stats.max_depth:
            self.stats.max_depth = len(stack)
        if not candidates:
            self.stats.deadlocks += 1
            log.debug("deadlock at %s, depth %d", pos, len(stack))

    def _revert(self, grid: Grid, point: _ChoicePoint) -> None:
        grid.uncollapse_cell(point.pos, point.saved_domain)
        grid.restore(point.undo)
        point.undo = None
        self.stats.backtracks += 1

    def _advance(self, grid: Grid, point: _ChoicePoint) -> bool:
        """Place the next valid candidate at ``point``. False once none remain."""
        while point.next_index < len(point.candidates):
            tile_id = point.candidates[point.next_index]
            point.next_index += 1
            if not grid.is_valid_placement(tile_id, point.pos):
                continue
            point.saved_domain = list(grid.domain(point.pos))
            grid.collapse_cell(point.pos, tile_id)
            point.undo = grid.propagate_from(point.pos)
            self.stats.placements += 1
            self._notify(grid)
            return True
        return False

    def _search(self, grid: Grid) -> bool:
        stack: List[_ChoicePoint] = []
        if grid.is_fully_collapsed():
            return True
        self._push(grid, stack)

        while stack:
            point = stack[-1]
            if point.undo is not None:
                # the subtree under this placement failed
                self._revert(grid, point)

            if self.node_limit is not None and self.stats.placements >= self.node_limit:
                self.stats.aborted = True
                log.warning("node limit %d reached, unwinding", self.node_limit)
                self._unwind(grid, stack)
                return False

            if not self._advance(grid, point):
                stack.pop()
                continue

            if grid.is_fully_collapsed():
                return True
            self._push(grid, stack)

        return False

    def _unwind(self, grid: Grid, stack: List[_ChoicePoint]) -> None:
        while stack:
            point = stack.pop()
            if point.undo is not None:
                self._revert(grid, point)

    def _notify(self, grid: Grid) -> None:
        if self.renderer is not None:
            self.renderer(grid)


def solve(
    rules: AdjacencyRules,
    rows: int,
    cols: int,
    rng_seed: int | None = None,
    *,
    rng: random.Random | None = None,
    renderer: Renderer | None = None,
    node_limit: int | None = None,
) -> Tuple[Grid, bool]:
    """Build a fresh grid and collapse it.

    ``rng`` takes precedence over ``rng_seed``; with neither, tie-breaking
    is not reproducible.
    """
    if rng is None:
        rng = random.Random(rng_seed)
    grid = Grid(rules, rows, cols)
    solver = Solver(rules, rng=rng, renderer=renderer, node_limit=node_limit)
    ok = solver.run(grid)
    return grid, ok
