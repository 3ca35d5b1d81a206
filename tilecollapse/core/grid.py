"""Rectangular board of cells and the queries/mutations the solver runs on it."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .model import (
    AdjacencyRules,
    Cell,
    Collapsed,
    Direction,
    InvariantViolation,
    Position,
    Uncollapsed,
)

Modification = Tuple[Position, str]


class Grid:
    """Mapping from (row, col) to cell, fully populated within bounds.

    Every cell starts uncollapsed with the whole tile set, in rule order.
    """

    def __init__(self, rules: AdjacencyRules, rows: int, cols: int):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"grid must be at least 1x1, got {rows}x{cols}")
        self.rules = rules
        self.rows = rows
        self.cols = cols
        tile_ids = rules.tile_ids
        self._cells: Dict[Position, Cell] = {
            (r, c): Uncollapsed(list(tile_ids)) for r in range(rows) for c in range(cols)
        }
        self._collapsed = 0

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.cols}, collapsed={self.collapsed_count()})"

    def __contains__(self, pos: object) -> bool:
        return pos in self._cells

    def positions(self) -> Iterator[Position]:
        """Row-major scan order."""
        for r in range(self.rows):
            for c in range(self.cols):
                yield (r, c)

    def cell(self, pos: Position) -> Cell:
        return self._cells[pos]

    def domain(self, pos: Position) -> List[str]:
        cell = self._cells[pos]
        if not isinstance(cell, Uncollapsed):
            raise InvariantViolation(f"cell {pos} is collapsed and has no domain")
        return cell.domain

    def neighbors(self, pos: Position) -> Iterator[Tuple[Direction, Position]]:
        """In-bounds neighbors, each paired with the direction ``pos`` lies in from it."""
        r, c = pos
        for direction in Direction:
            dr, dc = direction.offset
            npos = (r + dr, c + dc)
            if npos in self._cells:
                yield direction, npos

    # -- state changes -------------------------------------------------

    def collapse_cell(self, pos: Position, tile_id: str) -> None:
        if not isinstance(self._cells[pos], Collapsed):
            self._collapsed += 1
        self._cells[pos] = Collapsed(tile_id)

    def uncollapse_cell(self, pos: Position, domain: Sequence[str]) -> None:
        if isinstance(self._cells[pos], Collapsed):
            self._collapsed -= 1
        self._cells[pos] = Uncollapsed(list(domain))

    # -- queries -------------------------------------------------------

    def is_fully_collapsed(self) -> bool:
        return self._collapsed == len(self._cells)

    def collapsed_count(self) -> int:
        return self._collapsed

    def lowest_entropy_position(self) -> Position:
        """Uncollapsed cell with the fewest candidates; first in row-major order wins ties."""
        best: Optional[Position] = None
        best_size = 0
        for pos in self.positions():
            cell = self._cells[pos]
            if isinstance(cell, Collapsed):
                continue
            size = cell.entropy
            if best is None or size < best_size:
                best, best_size = pos, size
                if size == 0:
                    break
        if best is None:
            raise InvariantViolation("lowest entropy requested on a fully collapsed grid")
        return best

    def is_valid_placement(self, tile_id: str, pos: Position) -> bool:
        for direction, npos in self.neighbors(pos):
            neighbor = self._cells[npos]
            if isinstance(neighbor, Collapsed):
                if tile_id not in self.rules.allowed(neighbor.tile_id, direction):
                    return False
        return True

    # -- propagation ---------------------------------------------------

    def propagate_from(self, pos: Position) -> List[Modification]:
        """Prune neighbor domains against the tile collapsed at ``pos``.

        Returns the removals in the order they were made; hand the list to
        :meth:`restore` to undo them.
        """
        cell = self._cells[pos]
        if not isinstance(cell, Collapsed):
            raise InvariantViolation(f"propagate from uncollapsed cell {pos}")
        value = cell.tile_id

        modified: List[Modification] = []
        for direction, npos in self.neighbors(pos):
            neighbor = self._cells[npos]
            if not isinstance(neighbor, Uncollapsed):
                continue
            kept = []
            for candidate in neighbor.domain:
                if value in self.rules.allowed(candidate, direction):
                    kept.append(candidate)
                else:
                    modified.append((npos, candidate))
            neighbor.domain[:] = kept
        return modified

    def restore(self, modifications: Iterable[Modification]) -> None:
        for pos, tile_id in modifications:
            cell = self._cells.get(pos)
            if cell is None:
                continue
            if not isinstance(cell, Uncollapsed):
                # backtracking always reverts deeper collapses first
                raise InvariantViolation(
                    f"restoring {tile_id!r} into collapsed cell {pos} ({cell.tile_id!r})"
                )
            if tile_id not in cell.domain:
                cell.domain.append(tile_id)

    # -- views ---------------------------------------------------------

    def values(self) -> List[List[Optional[str]]]:
        """Tile ids by row; ``None`` where a cell is still uncollapsed."""
        out = []
        for r in range(self.rows):
            row = []
            for c in range(self.cols):
                cell = self._cells[(r, c)]
                row.append(cell.tile_id if isinstance(cell, Collapsed) else None)
            out.append(row)
        return out

    def snapshot(self, placeholder: str = ".") -> List[List[str]]:
        """Glyphs by row, for display."""
        return [
            [placeholder if tile_id is None else self.rules.glyph(tile_id) for tile_id in row]
            for row in self.values()
        ]
