"""Tests for the algorithm registry and input helpers."""

import pytest

import config
from algorithms import (
    REGISTRY,
    algorithms_by_tag,
    build_structure,
    generate_log,
    get_algorithm,
    get_pseudocode,
    list_algorithms,
    pseudocode_line,
)
from algorithms.inputs import generate_random_array, parse_custom_array
from algorithms.step import QuickKind
from graph import TreeNode


class TestRegistry:
    def test_all_families_registered(self):
        assert [a.key for a in list_algorithms()] == [
            "selection_sort", "merge_sort", "quick_sort", "fibonacci", "graph_traversal",
        ]

    def test_lookup(self):
        assert get_algorithm("merge_sort").label == "Merge Sort"
        assert get_algorithm("bogo_sort") is None

    def test_by_tag(self):
        keys = {a.key for a in algorithms_by_tag("divide-and-conquer")}
        assert keys == {"merge_sort", "quick_sort"}

    def test_card_to_dict(self):
        card = REGISTRY["quick_sort"].to_dict()
        assert card["complexity"]["worst"] == {"time": "O(n^2)", "space": "O(n)"}
        assert card["params"] == ["pivot_strategy", "seed"]

    def test_pseudocode_line_lookup(self):
        assert pseudocode_line("fibonacci", 3) == "        return n"
        assert pseudocode_line("fibonacci", None) == ""
        assert pseudocode_line("fibonacci", 99) == ""

    def test_traversal_listing_depends_on_method(self):
        assert get_pseudocode("graph_traversal", "bfs")[0] == "def bfs(graph, start):"
        assert get_pseudocode("graph_traversal", "dfs")[0] == "def dfs(graph, start):"
        with pytest.raises(ValueError):
            get_pseudocode("graph_traversal", "astar")


class TestBoundary:
    def test_generate_log_passes_params(self):
        log = generate_log("quick_sort", [9, 1, 5], pivot_strategy="median")
        assert log.count(QuickKind.QS_COMPARE) >= 3

    def test_generate_log_ignores_foreign_params(self):
        assert len(generate_log("merge_sort", [2, 1], pivot_strategy="median")) == 12

    def test_generate_log_accepts_a_graph(self, default_graph):
        log = generate_log("graph_traversal", default_graph, start_node="A", method="bfs")
        assert log[0].payload == ("A",)

    def test_unknown_key(self):
        with pytest.raises(ValueError):
            generate_log("bogo_sort", [1])

    def test_build_structure_per_family(self, default_graph):
        assert build_structure("selection_sort", [3, 1]) is None
        assert isinstance(build_structure("merge_sort", [3, 1]), TreeNode)
        assert build_structure("fibonacci", 4).value == 4
        assert build_structure("graph_traversal", default_graph) is default_graph

    def test_quick_structure_follows_strategy(self):
        data = [1, 2, 3, 4]
        last = build_structure("quick_sort", data, pivot_strategy="last")
        first = build_structure("quick_sort", data, pivot_strategy="first")
        assert last.to_dict() != first.to_dict()


class TestInputs:
    def test_random_array_size_and_range(self):
        values = generate_random_array(20, seed=1)
        assert len(values) == 20
        assert all(config.MIN_VALUE <= v <= config.MAX_VALUE for v in values)

    def test_random_array_seeded(self):
        assert generate_random_array(8, seed=4) == generate_random_array(8, seed=4)

    def test_parse_drops_bad_entries(self):
        assert parse_custom_array("8, 3, x, 1000, 10, 4 ,") == [8, 10]

    def test_parse_keeps_values_in_range(self):
        assert parse_custom_array(" 5,100 , 42") == [5, 100, 42]

    def test_parse_rejects_empty_result(self):
        with pytest.raises(ValueError):
            parse_custom_array("a, b, 1")
