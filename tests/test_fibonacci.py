"""Tests for the recursive fibonacci step log and call tree."""

from algorithms.fibonacci import PSEUDOCODE, build_tree, fibonacci
from algorithms.step import FibonacciKind


class TestFibonacciLog:
    def test_base_case(self):
        assert fibonacci(1).to_list() == [
            ["stack_push", "0", 1],
            ["call", "0", 1],
            ["return", "0", 1, 3],
            ["stack_pop", "0", 3],
        ]

    def test_fib_two(self):
        assert fibonacci(2).to_list() == [
            ["stack_push", "0", 1],
            ["call", "0", 1],
            ["stack_push", "0.0", 1],
            ["call", "0.0", 1],
            ["return", "0.0", 1, 3],
            ["stack_pop", "0.0", 3],
            ["call", "0", 5],
            ["stack_push", "0.1", 1],
            ["call", "0.1", 1],
            ["return", "0.1", 0, 3],
            ["stack_pop", "0.1", 3],
            ["return", "0", 1, 6],
            ["stack_pop", "0", 6],
        ]

    def test_root_returns_fib_n(self):
        log = fibonacci(6)
        root_returns = [s for s in log if s.kind is FibonacciKind.RETURN and s.node_id == "0"]
        assert root_returns[-1].payload[1] == 8

    def test_push_and_pop_balance(self):
        log = fibonacci(5)
        assert log.count(FibonacciKind.STACK_PUSH) == log.count(FibonacciKind.STACK_POP) == 15

    def test_lines_fall_inside_listing(self):
        for step in fibonacci(4):
            assert 1 <= step.line <= len(PSEUDOCODE)

    def test_deterministic(self):
        assert fibonacci(5).to_list() == fibonacci(5).to_list()


class TestFibonacciTree:
    def test_fib_three_tree(self):
        tree = build_tree(3)
        assert tree.value == 3
        left, right = tree.children
        assert (left.id, left.value) == ("0.0", 2)
        assert (right.id, right.value) == ("0.1", 1)
        assert [(c.id, c.value) for c in left.children] == [("0.0.0", 1), ("0.0.1", 0)]

    def test_log_and_tree_ids_match(self):
        assert fibonacci(5).node_ids() == build_tree(5).ids()
