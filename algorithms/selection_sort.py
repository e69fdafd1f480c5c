"""
selection_sort.py — Selection Sort
===================================
Records a StepLog for plain (unstable) selection sort:
  1. Outer loop starts at i  →  ss-outer-loop
  2. min_idx ← i             →  ss-min-init
  3. Compare arr[j] with the running minimum  →  ss-inner-compare
  4. Strictly smaller element found           →  ss-min-update
  5. Minimum moved away from i                →  ss-swap
  6. arr[i] is final                          →  ss-sorted
After the loop the last index is marked sorted and a finish marker closes
the log.
"""

from typing import List, Sequence

from algorithms.step import SelectionKind, StepLog


# ---------------------------------------------------------------------------
# Pseudocode — line n is PSEUDOCODE[n - 1]
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def selection_sort(arr):",                              # 1
    "    n = len(arr)",                                      # 2
    "    for i in range(n - 1):",                            # 3
    "        min_idx = i",                                   # 4
    "        for j in range(i + 1, n):",                     # 5
    "            if arr[j] < arr[min_idx]:",                 # 6
    "                min_idx = j",                           # 7
    "        if min_idx != i:",                              # 8
    "            arr[i], arr[min_idx] = arr[min_idx], arr[i]",  # 9
    "        # arr[i] is now in its final place",            # 10
    "    return arr",                                        # 11
]


def selection_sort(array: Sequence[float]) -> StepLog:
    """
    Sort a private copy of `array` and return the recorded steps.

    The caller's sequence is never modified.
    """
    log = StepLog()
    arr = list(array)
    n = len(arr)

    for i in range(n - 1):
        log.append(SelectionKind.SS_OUTER_LOOP, i, line=3)
        min_idx = i
        log.append(SelectionKind.SS_MIN_INIT, min_idx, line=4)

        for j in range(i + 1, n):
            log.append(SelectionKind.SS_INNER_COMPARE, j, min_idx, line=6)
            if arr[j] < arr[min_idx]:
                min_idx = j
                log.append(SelectionKind.SS_MIN_UPDATE, min_idx, line=7)

        if min_idx != i:
            log.append(SelectionKind.SS_SWAP, i, min_idx, line=9)
            arr[i], arr[min_idx] = arr[min_idx], arr[i]
        log.append(SelectionKind.SS_SORTED, i, line=10)

    if n > 0:
        log.append(SelectionKind.SS_SORTED, n - 1, line=11)
    log.append(SelectionKind.FINISH, line=11)
    return log
