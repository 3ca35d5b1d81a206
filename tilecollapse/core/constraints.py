"""Post-hoc checks that a collapsed grid honors its adjacency rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .grid import Grid
from .model import AdjacencyRules, Collapsed, Direction, Position


@dataclass(frozen=True)
class Violation:
    """``tile_id`` at ``position`` is not allowed by the neighbor it lies ``direction`` of."""
    position: Position
    direction: Direction
    neighbor: Position
    tile_id: str
    neighbor_tile_id: str

    def __str__(self) -> str:
        return (
            f"{self.tile_id!r} at {self.position} is not allowed {self.direction.value} "
            f"of {self.neighbor_tile_id!r} at {self.neighbor}"
        )


def find_violations(grid: Grid, rules: AdjacencyRules) -> List[Violation]:
    """Every collapsed pair whose neighbor's rule rejects the cell.

    Uncollapsed cells are ignored, so this also works on partial grids.
    """
    result = []
    for pos in grid.positions():
        cell = grid.cell(pos)
        if not isinstance(cell, Collapsed):
            continue
        for direction, npos in grid.neighbors(pos):
            neighbor = grid.cell(npos)
            if not isinstance(neighbor, Collapsed):
                continue
            if cell.tile_id not in rules.allowed(neighbor.tile_id, direction):
                result.append(Violation(pos, direction, npos, cell.tile_id, neighbor.tile_id))
    return result


def is_solution(grid: Grid, rules: AdjacencyRules) -> bool:
    return grid.is_fully_collapsed() and not find_violations(grid, rules)
