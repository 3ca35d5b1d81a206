from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Mapping, Tuple

import yaml

from tilecollapse.core.model import AdjacencyRules, Direction, TileRule

log = logging.getLogger(__name__)

Asymmetry = Tuple[str, Direction, str]


class ConfigurationError(ValueError):
    """Tile prototype data is missing or malformed."""


def load_rules(path: str | Path) -> AdjacencyRules:
    """Load a JSON or YAML prototype file into an AdjacencyRules table."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigurationError(f"cannot read {path}: {exc}") from exc
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"cannot parse {path}: {exc}") from exc

    rules = rules_from_mapping(data, source=str(path))
    log.info("loaded %d tile prototypes from %s", len(rules), path)
    return rules


def rules_from_mapping(data: Any, source: str = "<mapping>") -> AdjacencyRules:
    """Validate already-parsed prototype data and build the rule table."""
    if not isinstance(data, Mapping) or not data:
        raise ConfigurationError(f"{source}: expected a non-empty mapping of tile prototypes")

    tile_ids = [str(k) for k in data]
    known = set(tile_ids)
    rules: Dict[str, TileRule] = {}
    for tile_id, entry in zip(tile_ids, data.values()):
        rules[tile_id] = _parse_entry(tile_id, entry, known, source)

    table = AdjacencyRules(rules)
    for a, direction, b in find_asymmetries(table):
        log.warning(
            "%s: %r allows %r %s of it, but %r does not allow %r %s of it",
            source, a, b, direction.value, b, a, direction.opposite.value,
        )
    return table


def _parse_entry(tile_id: str, entry: Any, known: set, source: str) -> TileRule:
    where = f"{source}: tile {tile_id!r}"
    if not isinstance(entry, Mapping):
        raise ConfigurationError(f"{where}: expected a mapping, got {type(entry).__name__}")

    char = entry.get("char")
    if not isinstance(char, str) or len(char) != 1:
        raise ConfigurationError(f"{where}: 'char' must be a single character, got {char!r}")

    raw = entry.get("valid_neighbors", {})
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"{where}: 'valid_neighbors' must be a mapping")

    neighbors: Dict[Direction, FrozenSet[str]] = {}
    for key, members in raw.items():
        try:
            direction = Direction(str(key))
        except ValueError:
            raise ConfigurationError(f"{where}: unknown direction {key!r}") from None
        neighbors[direction] = _parse_members(members, known, f"{where} {direction.value}")

    for direction in Direction:
        if direction not in neighbors:
            log.warning("%s: no %r neighbors listed, allowing none", where, direction.value)
            neighbors[direction] = frozenset()

    return TileRule(tile_id=tile_id, glyph=char, neighbors=neighbors)


def _parse_members(members: Any, known: set, where: str) -> FrozenSet[str]:
    if members is None:
        return frozenset()
    if isinstance(members, str) or not isinstance(members, (list, tuple)):
        raise ConfigurationError(f"{where}: expected a list of tile ids, got {members!r}")
    out = []
    for m in members:
        name = str(m)
        if name not in known:
            raise ConfigurationError(f"{where}: unknown tile {name!r}")
        out.append(name)
    return frozenset(out)


def find_asymmetries(rules: AdjacencyRules) -> List[Asymmetry]:
    """Pairs listed on one side only.

    ``(a, d, b)`` means ``a`` lists ``b`` under ``d`` while ``b`` does not
    list ``a`` under the opposite direction. The solver enforces both
    tables, so such pairs can never end up adjacent.
    """
    result = []
    for a in rules:
        for direction in Direction:
            for b in sorted(rules.allowed(a, direction)):
                if a not in rules.allowed(b, direction.opposite):
                    result.append((a, direction, b))
    return result
