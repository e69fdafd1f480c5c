"""Tests for run recording, export and comparison."""

import json

import pytest

from engine import Recorder, compare


class TestRecorder:
    def test_selection_metrics(self):
        rec = Recorder()
        m = rec.start("selection_sort", [5, 3, 4, 1, 2])
        assert (m.comparisons, m.swaps, m.total_steps) == (10, 4, 33)
        assert m.input_size == 5
        assert m.algo_label == "Selection Sort"

    def test_input_is_copied(self):
        data = [4, 2]
        rec = Recorder()
        rec.start("merge_sort", data)
        data.append(1)
        assert rec.snapshot(len(rec.log)).array == [2, 4]

    def test_merge_metrics_count_writes(self):
        m = Recorder().start("merge_sort", [4, 2])
        assert (m.comparisons, m.writes) == (1, 2)

    def test_random_pivot_gets_a_seed(self):
        rec = Recorder()
        rec.start("quick_sort", [8, 3, 5, 1, 9], pivot_strategy="random")
        assert isinstance(rec.params["seed"], int)
        assert rec.snapshot(len(rec.log)).array == [1, 3, 5, 8, 9]

    def test_fibonacci_metrics(self):
        rec = Recorder()
        m = rec.start("fibonacci", 3)
        assert m.calls == 5
        assert rec.snapshot(len(rec.log)).result == 2

    def test_traversal_metrics(self, default_graph):
        m = Recorder().start("graph_traversal", default_graph, start_node="A", method="bfs")
        assert m.nodes_visited == 7
        assert m.edges_explored == 6

    def test_traversal_snapshot_covers_the_whole_graph(self, default_graph):
        rec = Recorder()
        rec.start("graph_traversal", default_graph, start_node="A", method="bfs")
        snap = rec.snapshot(0)
        assert snap.node_states == {"A": "start", **{n: "unvisited" for n in "BCDEFG"}}
        assert set(snap.edge_states.values()) == {"default"}

    def test_snapshot_before_start(self):
        with pytest.raises(RuntimeError):
            Recorder().snapshot(0)

    def test_unknown_algorithm(self):
        with pytest.raises(ValueError):
            Recorder().start("bogo_sort", [1, 2])


class TestExport:
    def test_export_is_json(self):
        rec = Recorder()
        rec.start("quick_sort", [3, 1, 2], pivot_strategy="last")
        dump = rec.export()
        json.dumps(dump)
        assert dump["steps"][0] == ["qs-call", "0", None, 0, 2, 1]
        assert dump["structure"]["id"] == "0"
        assert dump["metrics"]["swaps"] == 3

    def test_export_of_traversal_includes_graph(self, default_graph):
        rec = Recorder()
        rec.start("graph_traversal", default_graph, start_node="A", method="dfs")
        dump = rec.export()
        json.dumps(dump)
        assert len(dump["input"]["nodes"]) == 7

    def test_quick_sort_summary(self):
        rec = Recorder()
        rec.start("quick_sort", [3, 1, 2], pivot_strategy="last")
        assert rec.summary_text().splitlines()[:8] == [
            "Algorithm: Quick Sort",
            "Pivot Strategy: last",
            "Initial Array: [3, 1, 2]",
            "Sorted Array: [1, 2, 3]",
            "",
            "Performance:",
            "  - Comparisons: 2",
            "  - Swaps: 3",
        ]

    def test_traversal_summary(self, default_graph):
        rec = Recorder()
        rec.start("graph_traversal", default_graph, start_node="A", method="dfs")
        text = rec.summary_text()
        assert "Visit Order: A, B, D, E, C, F, G" in text
        assert "Method: DFS" in text


class TestCompare:
    def test_pivot_strategies_on_sorted_input(self):
        data = [5, 10, 15, 20, 25, 30, 35, 40]
        last, median = Recorder(), Recorder()
        last.start("quick_sort", data, pivot_strategy="last")
        median.start("quick_sort", data, pivot_strategy="median")
        result = compare(last, median)
        assert result.winner_comparisons == "Quick Sort (median)"
        assert result.left.params == {"pivot_strategy": "last"}

    def test_tie(self):
        a, b = Recorder(), Recorder()
        a.start("selection_sort", [2, 1])
        b.start("selection_sort", [2, 1])
        result = compare(a, b)
        assert result.winner_steps == result.winner_swaps == "tie"
