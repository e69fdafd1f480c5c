"""Tests for the merge sort step log and its recursion tree."""

from algorithms.merge_sort import PSEUDOCODE, build_tree, merge_sort
from algorithms.step import MergeKind


class TestMergeSortLog:
    def test_two_elements(self):
        assert merge_sort([4, 2]).to_list() == [
            ["ms-call", "0", 0, 1, 1],
            ["ms-call", "0", 0, 1, 5],
            ["ms-call", "0.0", 0, 0, 1],
            ["ms-return", "0.0", 3],
            ["ms-call", "0", 0, 1, 6],
            ["ms-call", "0.1", 1, 1, 1],
            ["ms-return", "0.1", 3],
            ["ms-call", "0", 0, 1, 7],
            ["ms-compare", "0", 0, 0, 13],
            ["ms-write", "0", 0, 2, 17],
            ["ms-write", "0", 1, 4, 20],
            ["ms-return", "0", 7],
        ]

    def test_one_compare_for_two_elements(self):
        assert merge_sort([4, 2]).count(MergeKind.MS_COMPARE) == 1

    def test_ties_take_the_left_element(self):
        log = merge_sort([3, 3])
        writes = [s for s in log if s.kind is MergeKind.MS_WRITE]
        assert writes[0].line == 14

    def test_one_write_per_element_per_level(self):
        # 4 elements: 2 merges of 2 + 1 merge of 4
        assert merge_sort([4, 3, 2, 1]).count(MergeKind.MS_WRITE) == 8

    def test_drain_writes_have_no_compares(self):
        log = merge_sort([1, 2, 3, 4])
        # left half exhausts first at the root: 2 compares, then 2 drained writes
        root_compares = [s for s in log if s.kind is MergeKind.MS_COMPARE and s.node_id == "0"]
        assert len(root_compares) == 2

    def test_trivial_inputs_have_empty_logs(self):
        assert len(merge_sort([])) == 0
        assert len(merge_sort([9])) == 0

    def test_lines_fall_inside_listing(self):
        for step in merge_sort([9, 4, 7, 1, 3]):
            assert 1 <= step.line <= len(PSEUDOCODE)

    def test_deterministic(self):
        data = [6, 1, 5, 2, 8, 3]
        assert merge_sort(data).to_list() == merge_sort(list(data)).to_list()

    def test_input_is_not_modified(self):
        data = [5, 1, 4]
        merge_sort(data)
        assert data == [5, 1, 4]


class TestMergeSortTree:
    def test_tree_splits_at_floor_mid(self):
        tree = build_tree([5, 1, 4])
        left, right = tree.children
        assert (left.start, left.end) == (0, 1)
        assert (right.start, right.end) == (2, 2)

    def test_log_and_tree_ids_match(self):
        data = [8, 3, 5, 1, 9, 2, 7]
        assert set(merge_sort(data).node_ids()) == set(build_tree(data).ids())
