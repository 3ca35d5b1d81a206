"""Shared pytest fixtures for solver tests."""

import logging
from pathlib import Path

import pytest

from tilecollapse.core.model import AdjacencyRules, Direction, TileRule
from tilecollapse.io.parser import load_rules, rules_from_mapping

ROOT = Path(__file__).parent.parent
FIXTURES = Path(__file__).parent / "fixtures"


def make_rules(table):
    """Build rules from {tile: (glyph, {direction: [tiles]})} without the loader."""
    return AdjacencyRules({
        tile_id: TileRule(
            tile_id,
            glyph,
            {Direction(d): frozenset(members) for d, members in neighbors.items()},
        )
        for tile_id, (glyph, neighbors) in table.items()
    })


def uniform(glyph, allowed):
    return (glyph, {d.value: list(allowed) for d in Direction})


@pytest.fixture
def terrain_rules():
    """The sample prototypes shipped at the repository root."""
    return load_rules(ROOT / "prototypes.json")


@pytest.fixture
def pipe_rules():
    return load_rules(FIXTURES / "pipes.yaml")


@pytest.fixture
def single_tile_rules():
    return make_rules({"x": uniform("#", ["x"])})


@pytest.fixture
def directed_pair_rules():
    """A allows B only to its right; B allows A only to its left."""
    return rules_from_mapping({
        "A": {"char": "a", "valid_neighbors": {"right": ["B"], "left": [], "above": [], "below": []}},
        "B": {"char": "b", "valid_neighbors": {"right": [], "left": ["A"], "above": [], "below": []}},
    })


@pytest.fixture
def isolated_rules():
    """Two tiles that accept no neighbor at all."""
    return make_rules({"A": uniform("a", []), "B": uniform("b", [])})


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("tilecollapse")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
