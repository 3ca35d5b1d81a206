from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, Mapping, Tuple, Union


class InvariantViolation(RuntimeError):
    """Raised when the solver reaches a state valid input can never produce."""


class Direction(str, Enum):
    """Adjacency direction, valued as in the prototype files."""
    RIGHT = "right"
    LEFT = "left"
    ABOVE = "above"
    BELOW = "below"

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @property
    def offset(self) -> Tuple[int, int]:
        """Offset from a cell to the neighbor it lies in this direction of."""
        return _OFFSETS[self]


_OPPOSITES = {
    Direction.RIGHT: Direction.LEFT,
    Direction.LEFT: Direction.RIGHT,
    Direction.ABOVE: Direction.BELOW,
    Direction.BELOW: Direction.ABOVE,
}

# (row, col) deltas; rows grow downward.
_OFFSETS = {
    Direction.RIGHT: (0, -1),
    Direction.LEFT: (0, 1),
    Direction.ABOVE: (1, 0),
    Direction.BELOW: (-1, 0),
}


Position = Tuple[int, int]


@dataclass(frozen=True)
class TileRule:
    """Glyph and allowed neighbors for one tile identifier."""
    tile_id: str
    glyph: str
    neighbors: Mapping[Direction, FrozenSet[str]] = field(default_factory=dict)

    def allows(self, direction: Direction, tile_id: str) -> bool:
        return tile_id in self.neighbors.get(direction, frozenset())


class AdjacencyRules:
    """Read-only table of tile rules, kept in authoring order."""

    def __init__(self, rules: Mapping[str, TileRule]):
        self._rules: Dict[str, TileRule] = dict(rules)

    def __getitem__(self, tile_id: str) -> TileRule:
        try:
            return self._rules[tile_id]
        except KeyError:
            raise InvariantViolation(f"no rule entry for tile {tile_id!r}") from None

    def __contains__(self, tile_id: object) -> bool:
        return tile_id in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"AdjacencyRules({list(self._rules)!r})"

    @property
    def tile_ids(self) -> List[str]:
        return list(self._rules)

    def glyph(self, tile_id: str) -> str:
        return self[tile_id].glyph

    def allowed(self, tile_id: str, direction: Direction) -> FrozenSet[str]:
        return self[tile_id].neighbors.get(direction, frozenset())


@dataclass(frozen=True)
class Collapsed:
    """A cell fixed to a single tile."""
    tile_id: str


@dataclass
class Uncollapsed:
    """A cell still holding its candidate tiles."""
    domain: List[str]

    @property
    def entropy(self) -> int:
        return len(self.domain)


Cell = Union[Collapsed, Uncollapsed]
