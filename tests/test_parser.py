import json
import logging

import pytest

from tilecollapse.core.model import Direction
from tilecollapse.io.parser import (
    ConfigurationError,
    find_asymmetries,
    load_rules,
    rules_from_mapping,
)

ALL_EMPTY = {"right": [], "left": [], "above": [], "below": []}


def test_load_sample_prototypes(terrain_rules):
    assert terrain_rules.tile_ids == ["water", "sand", "grass", "forest", "mountain"]
    assert terrain_rules.glyph("water") == "~"
    assert terrain_rules.allowed("grass", Direction.ABOVE) == frozenset(terrain_rules.tile_ids)
    assert find_asymmetries(terrain_rules) == []


def test_load_yaml(pipe_rules):
    assert pipe_rules.tile_ids == ["blank", "cap_left", "pipe", "cap_right"]
    assert pipe_rules.glyph("blank") == " "
    assert pipe_rules.allowed("cap_left", Direction.RIGHT) == {"pipe", "cap_right"}
    assert find_asymmetries(pipe_rules) == []


def test_load_json_by_suffix(tmp_path):
    path = tmp_path / "tiles.json"
    path.write_text(json.dumps({"a": {"char": "#", "valid_neighbors": {**ALL_EMPTY, "right": ["a"]}}}))
    rules = load_rules(path)
    assert rules.allowed("a", Direction.RIGHT) == {"a"}


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="cannot read"):
        load_rules(tmp_path / "nope.yaml")


def test_unparseable_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(ConfigurationError, match="cannot parse"):
        load_rules(path)


@pytest.mark.parametrize(
    "data,message",
    [
        (None, "non-empty mapping"),
        ({}, "non-empty mapping"),
        (["a"], "non-empty mapping"),
        ({"a": "x"}, "expected a mapping"),
        ({"a": {"valid_neighbors": ALL_EMPTY}}, "single character"),
        ({"a": {"char": "##", "valid_neighbors": ALL_EMPTY}}, "single character"),
        ({"a": {"char": "#", "valid_neighbors": ["right"]}}, "'valid_neighbors' must be a mapping"),
        ({"a": {"char": "#", "valid_neighbors": {"up": []}}}, "unknown direction 'up'"),
        ({"a": {"char": "#", "valid_neighbors": {"right": "a"}}}, "expected a list"),
        ({"a": {"char": "#", "valid_neighbors": {"right": ["b"]}}}, "unknown tile 'b'"),
    ],
)
def test_rejects_malformed_prototypes(data, message):
    with pytest.raises(ConfigurationError, match=message):
        rules_from_mapping(data)


def test_missing_directions_allow_nothing(caplog):
    with caplog.at_level(logging.WARNING, logger="tilecollapse"):
        rules = rules_from_mapping({"a": {"char": "#", "valid_neighbors": {"right": ["a"], "left": ["a"]}}})
    assert rules.allowed("a", Direction.ABOVE) == frozenset()
    assert rules.allowed("a", Direction.BELOW) == frozenset()
    assert "no 'above' neighbors" in caplog.text


def test_asymmetric_rules_are_reported(caplog, directed_pair_rules):
    # the directed pair is written consistently
    assert find_asymmetries(directed_pair_rules) == []

    data = {
        "A": {"char": "a", "valid_neighbors": {**ALL_EMPTY, "right": ["B"]}},
        "B": {"char": "b", "valid_neighbors": ALL_EMPTY},
    }
    with caplog.at_level(logging.WARNING, logger="tilecollapse"):
        rules = rules_from_mapping(data)
    assert find_asymmetries(rules) == [("A", Direction.RIGHT, "B")]
    assert "'A' allows 'B' right of it" in caplog.text
