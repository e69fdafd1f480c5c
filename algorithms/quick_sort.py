"""
quick_sort.py — Quick Sort
===========================
Lomuto-partition quick sort with a selectable pivot strategy:

    first   – arr[low]
    last    – arr[high]                    (default)
    random  – uniform index in [low, high]  (seedable)
    median  – median of arr[low], arr[mid], arr[high]

Whatever the strategy, the chosen pivot is swapped into `high` before
partitioning.  That swap is always recorded, even when the pivot already
sits at `high`; such a step has equal indices.

The recursion shape depends on the data (where each pivot lands), so the
partition tree is built by running the very same helpers with no log
attached; see build_quick_sort_tree().
"""

import random
from typing import List, Optional, Sequence

from algorithms.step import QuickKind, StepLog
from graph.tree import TreeNode, child_id

PIVOT_STRATEGIES = ("first", "last", "random", "median")


PSEUDOCODE: List[str] = [
    "def quick_sort(arr, low, high):",                          # 1
    "    if low < high:",                                       # 2
    "        pivot_idx = choose_pivot(arr, low, high)",         # 3
    "        arr[pivot_idx], arr[high] = arr[high], arr[pivot_idx]",  # 4
    "        pi = partition(arr, low, high)",                   # 5
    "        quick_sort(arr, low, pi - 1)",                     # 6
    "        quick_sort(arr, pi + 1, high)",                    # 7
    "",                                                         # 8
    "def partition(arr, low, high):",                           # 9
    "    pivot = arr[high]",                                    # 10
    "    i = low - 1",                                          # 11
    "    for j in range(low, high):",                           # 12
    "        if arr[j] < pivot:",                               # 13
    "            i += 1",                                       # 14
    "            arr[i], arr[j] = arr[j], arr[i]",              # 15
    "    arr[i + 1], arr[high] = arr[high], arr[i + 1]",        # 16
    "    return i + 1",                                         # 17
]


def quick_sort(array: Sequence[float], pivot_strategy: str = "last", seed: Optional[int] = None) -> StepLog:
    """
    Record a quick sort of a private copy of `array`.

    Args:
        array          : Values to sort (left untouched).
        pivot_strategy : One of PIVOT_STRATEGIES.
        seed           : Seed for the `random` strategy; None → fresh entropy.
    """
    _check_strategy(pivot_strategy)
    log = StepLog()
    if len(array) <= 1:
        if len(array) == 1:
            log.append(QuickKind.QS_CALL, "0", None, 0, 0, line=1)
            log.append(QuickKind.QS_SORTED, "0", line=2)
        return log

    arr = list(array)
    _sort(arr, 0, len(arr) - 1, None, "0", pivot_strategy, random.Random(seed), log)
    return log


def build_quick_sort_tree(array: Sequence[float], pivot_strategy: str = "last", seed: Optional[int] = None) -> TreeNode:
    """
    Partition tree for quick_sort(array, pivot_strategy, seed).

    Ids and ranges match the log exactly as long as the same arguments
    (and, for `random`, the same seed) are used.
    """
    _check_strategy(pivot_strategy)
    if len(array) <= 1:
        return TreeNode(id="0", start=0, end=len(array) - 1)
    arr = list(array)
    return _sort(arr, 0, len(arr) - 1, None, "0", pivot_strategy, random.Random(seed), None)


def choose_median_of_three(a: float, b: float, c: float) -> int:
    """0, 1 or 2: position of the value that is not strictly outside the other two."""
    if (a > b) != (a > c):
        return 0
    if (b > a) != (b > c):
        return 1
    return 2


# ---------------------------------------------------------------------------
# Shared helpers — `log` is None while building the tree
# ---------------------------------------------------------------------------
def _check_strategy(strategy: str) -> None:
    if strategy not in PIVOT_STRATEGIES:
        raise ValueError(f"Unknown pivot strategy: {strategy}")


def _emit(log: Optional[StepLog], kind: QuickKind, *payload, line: int) -> None:
    if log is not None:
        log.append(kind, *payload, line=line)


def _sort(
    arr: List[float],
    low: int,
    high: int,
    parent_id: Optional[str],
    node_id: str,
    strategy: str,
    rng: random.Random,
    log: Optional[StepLog],
) -> TreeNode:
    node = TreeNode(id=node_id, start=low, end=high, parent_id=parent_id)
    _emit(log, QuickKind.QS_CALL, node_id, parent_id, low, high, line=1)

    if low >= high:
        _emit(log, QuickKind.QS_SORTED, node_id, line=2)
        return node

    _choose_pivot(arr, low, high, strategy, rng, node_id, log)
    pi = _partition(arr, low, high, node_id, log)
    _emit(log, QuickKind.QS_PARTITION_COMPLETE, node_id, pi, line=5)

    node.children = [
        _sort(arr, low, pi - 1, node_id, child_id(node_id, 0), strategy, rng, log),
        _sort(arr, pi + 1, high, node_id, child_id(node_id, 1), strategy, rng, log),
    ]

    _emit(log, QuickKind.QS_SORTED, node_id, line=7)
    return node


def _choose_pivot(
    arr: List[float],
    low: int,
    high: int,
    strategy: str,
    rng: random.Random,
    node_id: str,
    log: Optional[StepLog],
) -> None:
    if strategy == "first":
        pivot_idx = low
    elif strategy == "random":
        pivot_idx = rng.randint(low, high)
    elif strategy == "median":
        mid = (low + high) // 2
        _emit(log, QuickKind.QS_COMPARE, node_id, low, mid, line=3)
        _emit(log, QuickKind.QS_COMPARE, node_id, mid, high, line=3)
        _emit(log, QuickKind.QS_COMPARE, node_id, low, high, line=3)
        pivot_idx = (low, mid, high)[choose_median_of_three(arr[low], arr[mid], arr[high])]
    else:
        pivot_idx = high

    _emit(log, QuickKind.QS_PIVOT_SELECT, node_id, pivot_idx, arr[pivot_idx], line=3)
    _emit(log, QuickKind.QS_SWAP, node_id, pivot_idx, high, line=4)
    arr[pivot_idx], arr[high] = arr[high], arr[pivot_idx]


def _partition(arr: List[float], low: int, high: int, node_id: str, log: Optional[StepLog]) -> int:
    pivot = arr[high]
    _emit(log, QuickKind.QS_PIVOT, node_id, high, line=10)
    i = low - 1
    _emit(log, QuickKind.QS_POINTERS, node_id, i, low, line=11)

    for j in range(low, high):
        _emit(log, QuickKind.QS_POINTERS, node_id, i, j, line=12)
        _emit(log, QuickKind.QS_COMPARE, node_id, j, high, line=13)
        if arr[j] < pivot:
            i += 1
            _emit(log, QuickKind.QS_POINTERS, node_id, i, j, line=14)
            _emit(log, QuickKind.QS_SWAP, node_id, i, j, line=15)
            arr[i], arr[j] = arr[j], arr[i]

    _emit(log, QuickKind.QS_SWAP, node_id, i + 1, high, line=16)
    arr[i + 1], arr[high] = arr[high], arr[i + 1]
    _emit(log, QuickKind.QS_POINTERS, node_id, None, None, line=17)
    return i + 1
