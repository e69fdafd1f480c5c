"""
fibonacci.py — Naive Recursive Fibonacci
=========================================
Records the exponential call tree of fib(n).  Each call is a tree node
("0" for fib(n), `id.0` for its fib(n-1) branch, `id.1` for fib(n-2)),
so the replay engine can colour the static tree built by
graph.tree.build_fibonacci_tree().

Per call:
    stack_push, call                 on entry
    return(n), stack_pop             base case n <= 1
    … left branch …, call (again), … right branch …, return(sum), stack_pop
"""

from typing import List

from algorithms.step import FibonacciKind, StepLog
from graph.tree import TreeNode, build_fibonacci_tree, child_id


PSEUDOCODE: List[str] = [
    "def fibonacci(n):",               # 1
    "    if n <= 1:",                  # 2
    "        return n",                # 3
    "    left = fibonacci(n - 1)",     # 4
    "    right = fibonacci(n - 2)",    # 5
    "    return left + right",         # 6
]


def fibonacci(n: int) -> StepLog:
    log = StepLog()
    _fib(n, "0", log)
    return log


def build_tree(n: int) -> TreeNode:
    return build_fibonacci_tree(n)


def _fib(num: int, node_id: str, log: StepLog) -> int:
    log.append(FibonacciKind.STACK_PUSH, node_id, line=1)
    log.append(FibonacciKind.CALL, node_id, line=1)

    if num <= 1:
        log.append(FibonacciKind.RETURN, node_id, num, line=3)
        log.append(FibonacciKind.STACK_POP, node_id, line=3)
        return num

    left = _fib(num - 1, child_id(node_id, 0), log)
    # parent becomes active again before its second call
    log.append(FibonacciKind.CALL, node_id, line=5)
    right = _fib(num - 2, child_id(node_id, 1), log)

    result = left + right
    log.append(FibonacciKind.RETURN, node_id, result, line=6)
    log.append(FibonacciKind.STACK_POP, node_id, line=6)
    return result
