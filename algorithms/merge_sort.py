"""
merge_sort.py — Merge Sort
===========================
Top-down merge sort over inclusive ranges.  Every recursive call is
identified by a tree-node id (see graph.tree): the root range is "0",
its left half `id.0` and its right half `id.1`.

Recorded events:
  1. Call entered / re-highlighted before each recursion and the merge  →  ms-call
  2. Base case reached, or merge finished                                →  ms-return
  3. One real comparison (ties take the left element)                   →  ms-compare
  4. One element placed into the merged result (drain loops included)   →  ms-write
"""

from typing import List, Sequence

from algorithms.step import MergeKind, StepLog
from graph.tree import TreeNode, build_merge_sort_tree, child_id


PSEUDOCODE: List[str] = [
    "def merge_sort(arr, start, end):",              # 1
    "    if start >= end:",                          # 2
    "        return arr[start:end + 1]",             # 3
    "    middle = (start + end) // 2",               # 4
    "    left = merge_sort(arr, start, middle)",     # 5
    "    right = merge_sort(arr, middle + 1, end)",  # 6
    "    return merge(left, right)",                 # 7
    "",                                              # 8
    "def merge(left, right):",                       # 9
    "    result = []",                               # 10
    "    i = j = 0",                                 # 11
    "    while i < len(left) and j < len(right):",   # 12
    "        if left[i] <= right[j]:",               # 13
    "            result.append(left[i])",            # 14
    "            i += 1",                            # 15
    "        else:",                                 # 16
    "            result.append(right[j])",           # 17
    "            j += 1",                            # 18
    "    while i < len(left):",                      # 19
    "        result.append(left[i])",                # 20
    "        i += 1",                                # 21
    "    while j < len(right):",                     # 22
    "        result.append(right[j])",               # 23
    "        j += 1",                                # 24
    "    return result",                             # 25
]


def merge_sort(array: Sequence[float]) -> StepLog:
    """Record a merge sort of a private copy of `array`.  Length ≤ 1 → empty log."""
    log = StepLog()
    if len(array) <= 1:
        return log
    _sort(list(array), 0, len(array) - 1, "0", log)
    return log


def build_tree(array: Sequence[float]) -> TreeNode:
    """Recursion tree matching merge_sort(array)."""
    return build_merge_sort_tree(0, len(array) - 1)


# ---------------------------------------------------------------------------
# Recursive helpers — `log` is owned by merge_sort() and threaded through
# ---------------------------------------------------------------------------
def _sort(arr: List[float], start: int, end: int, node_id: str, log: StepLog) -> List[float]:
    log.append(MergeKind.MS_CALL, node_id, start, end, line=1)

    if start >= end:
        log.append(MergeKind.MS_RETURN, node_id, line=3)
        return [arr[start]]

    middle = (start + end) // 2

    log.append(MergeKind.MS_CALL, node_id, start, end, line=5)
    left = _sort(arr, start, middle, child_id(node_id, 0), log)

    log.append(MergeKind.MS_CALL, node_id, start, end, line=6)
    right = _sort(arr, middle + 1, end, child_id(node_id, 1), log)

    log.append(MergeKind.MS_CALL, node_id, start, end, line=7)
    merged = _merge(left, right, node_id, log)

    log.append(MergeKind.MS_RETURN, node_id, line=7)
    return merged


def _merge(left: List[float], right: List[float], node_id: str, log: StepLog) -> List[float]:
    result: List[float] = []
    i = j = 0

    while i < len(left) and j < len(right):
        log.append(MergeKind.MS_COMPARE, node_id, i, j, line=13)
        if left[i] <= right[j]:
            log.append(MergeKind.MS_WRITE, node_id, len(result), left[i], line=14)
            result.append(left[i])
            i += 1
        else:
            log.append(MergeKind.MS_WRITE, node_id, len(result), right[j], line=17)
            result.append(right[j])
            j += 1

    while i < len(left):
        log.append(MergeKind.MS_WRITE, node_id, len(result), left[i], line=20)
        result.append(left[i])
        i += 1

    while j < len(right):
        log.append(MergeKind.MS_WRITE, node_id, len(result), right[j], line=23)
        result.append(right[j])
        j += 1

    return result
