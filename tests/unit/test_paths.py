"""Tests for dotted-path helpers."""

from __future__ import annotations

from arraykit.containers import KeyedMap, OrderedList
from arraykit.core.paths import data_get, data_has, data_set


TREE = {
    "server": {"host": "localhost", "ports": [80, 443]},
    "flags": {"debug": False},
    "a.b": "literal",
}


class TestDataGet:
    def test_nested(self):
        assert data_get(TREE, "server.host") == "localhost"

    def test_list_index_segment(self):
        assert data_get(TREE, "server.ports.1") == 443

    def test_non_canonical_index_segment(self):
        assert data_get(TREE, "server.ports.01") is None

    def test_falsy_value_is_returned(self):
        assert data_get(TREE, "flags.debug", "default") is False

    def test_exact_key_first(self):
        assert data_get(TREE, "a.b") == "literal"

    def test_none_path_returns_target(self):
        assert data_get(TREE, None) is TREE

    def test_scalar_target(self):
        assert data_get(5, "a", "d") == "d"

    def test_int_path_on_list(self):
        assert data_get(["x", "y"], 1) == "y"

    def test_through_containers(self):
        target = KeyedMap.create({"rows": OrderedList.create([{"id": 7}])})
        assert data_get(target, "rows.0.id") == 7

    def test_custom_separator(self):
        assert data_get(TREE, "server/host", separator="/") == "localhost"


class TestDataHas:
    def test_present(self):
        assert data_has(TREE, "server.ports.0") is True

    def test_missing(self):
        assert data_has(TREE, "server.user") is False

    def test_none_and_empty_paths(self):
        assert data_has(TREE, None) is False
        assert data_has(TREE, "") is False

    def test_empty_target(self):
        assert data_has({}, "a") is False
        assert data_has([], 0) is False


class TestDataSet:
    def test_leaves_input_untouched(self):
        result = data_set(TREE, "server.host", "remote")
        assert result["server"]["host"] == "remote"
        assert TREE["server"]["host"] == "localhost"
        assert result["flags"] is TREE["flags"]

    def test_creates_missing_levels(self):
        assert data_set({}, "x.y", 1) == {"x": {"y": 1}}

    def test_list_stays_list_when_contiguous(self):
        result = data_set(TREE, "server.ports.2", 8080)
        assert result["server"]["ports"] == [80, 443, 8080]

    def test_list_becomes_dict_on_gap(self):
        result = data_set(TREE, "server.ports.5", 8080)
        assert result["server"]["ports"] == {0: 80, 1: 443, 5: 8080}

    def test_string_segment_on_string_keyed_node(self):
        assert data_set({"a": {}}, "a.0", "v") == {"a": {"0": "v"}}

    def test_non_string_path(self):
        assert data_set({"a": 1}, 3, "v") == {"a": 1, 3: "v"}
