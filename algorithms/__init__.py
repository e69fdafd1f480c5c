"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm, generate_log, build_structure

REGISTRY is a dict:
    {
        "selection_sort": AlgoInfo(key, label, family, fn, pseudocode, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The engine and the web layer both
consume it, so adding an algorithm is: write the step-log generator, add
one entry here, add its fold to engine.replay.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from algorithms.step import StepLog
from algorithms.selection_sort import selection_sort as _selection,  PSEUDOCODE as _selection_pc
from algorithms.merge_sort     import merge_sort     as _merge,      PSEUDOCODE as _merge_pc, build_tree as _merge_tree
from algorithms.quick_sort     import quick_sort     as _quick,      PSEUDOCODE as _quick_pc, build_quick_sort_tree as _quick_tree
from algorithms.fibonacci      import fibonacci      as _fib,        PSEUDOCODE as _fib_pc,   build_tree as _fib_tree
from algorithms.traversal      import traverse       as _traverse,   PSEUDOCODE_BY_METHOD
from graph import Graph

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                        # registry key, e.g. "quick_sort"
    label:             str                        # human label, e.g. "Quick Sort"
    family:            str                        # "sorting" | "recursion" | "graph"
    fn:                Callable[..., StepLog]     # the step-log generator
    pseudocode:        List[str]                  # canonical listing, line n = pseudocode[n-1]
    build_structure:   Optional[Callable] = None  # tree / graph builder, if the view needs one
    params:            Tuple[str, ...] = ()       # keyword params fn accepts
    tags:              List[str] = field(default_factory=list)
    complexity_best:   Tuple[str, str] = ("", "")   # (time, space)
    complexity_avg:    Tuple[str, str] = ("", "")
    complexity_worst:  Tuple[str, str] = ("", "")
    description:       str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key":         self.key,
            "label":       self.label,
            "family":      self.family,
            "params":      list(self.params),
            "tags":        list(self.tags),
            "description": self.description,
            "complexity": {
                "best":    {"time": self.complexity_best[0],  "space": self.complexity_best[1]},
                "average": {"time": self.complexity_avg[0],   "space": self.complexity_avg[1]},
                "worst":   {"time": self.complexity_worst[0], "space": self.complexity_worst[1]},
            },
        }


# ---------------------------------------------------------------------------
# Adapters for the graph family (accept a Graph or a bare adjacency mapping)
# ---------------------------------------------------------------------------
def _traversal(data, start_node: str = "A", method: str = "dfs") -> StepLog:
    adjacency = data.adjacency if isinstance(data, Graph) else data
    return _traverse(adjacency, start_node, method)


def _traversal_structure(data, **_params):
    return data if isinstance(data, Graph) else None


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "selection_sort": AlgoInfo(
        key="selection_sort", label="Selection Sort", family="sorting",
        fn=_selection, pseudocode=_selection_pc,
        tags=["sorting", "in-place", "unstable"],
        complexity_best=("O(n^2)", "O(1)"), complexity_avg=("O(n^2)", "O(1)"), complexity_worst=("O(n^2)", "O(1)"),
        description="Repeatedly selects the smallest remaining element and swaps it into place.",
    ),

    "merge_sort": AlgoInfo(
        key="merge_sort", label="Merge Sort", family="sorting",
        fn=_merge, pseudocode=_merge_pc,
        build_structure=lambda data, **_: _merge_tree(data),
        tags=["sorting", "divide-and-conquer", "stable"],
        complexity_best=("O(n log n)", "O(n)"), complexity_avg=("O(n log n)", "O(n)"), complexity_worst=("O(n log n)", "O(n)"),
        description="Splits the array in halves, sorts each half, then merges them. Stable.",
    ),

    "quick_sort": AlgoInfo(
        key="quick_sort", label="Quick Sort", family="sorting",
        fn=_quick, pseudocode=_quick_pc,
        build_structure=lambda data, pivot_strategy="last", seed=None, **_: _quick_tree(data, pivot_strategy, seed),
        params=("pivot_strategy", "seed"),
        tags=["sorting", "divide-and-conquer", "in-place", "unstable"],
        complexity_best=("O(n log n)", "O(log n)"), complexity_avg=("O(n log n)", "O(log n)"), complexity_worst=("O(n^2)", "O(n)"),
        description="Partitions around a pivot, then sorts both sides. Pivot choice drives performance.",
    ),

    "fibonacci": AlgoInfo(
        key="fibonacci", label="Fibonacci (Recursive)", family="recursion",
        fn=_fib, pseudocode=_fib_pc,
        build_structure=lambda data, **_: _fib_tree(data),
        tags=["recursion", "exponential"],
        complexity_best=("O(2^n)", "O(n)"), complexity_avg=("O(2^n)", "O(n)"), complexity_worst=("O(2^n)", "O(n)"),
        description="Naive recursion: every call spawns fib(n-1) and fib(n-2). Watch the repeated work.",
    ),

    "graph_traversal": AlgoInfo(
        key="graph_traversal", label="Graph Traversal", family="graph",
        fn=_traversal, pseudocode=PSEUDOCODE_BY_METHOD["dfs"],
        build_structure=_traversal_structure,
        params=("start_node", "method"),
        tags=["graph", "traversal"],
        complexity_best=("O(V+E)", "O(V)"), complexity_avg=("O(V+E)", "O(V)"), complexity_worst=("O(V+E)", "O(V)"),
        description="DFS dives down one branch before backtracking; BFS explores level by level.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def require_algorithm(key: str) -> AlgoInfo:
    info = REGISTRY.get(key)
    if info is None:
        raise ValueError(f"Unknown algorithm: {key}")
    return info


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


def get_pseudocode(key: str, method: Optional[str] = None) -> List[str]:
    """Listing for an algorithm; graph traversal picks the DFS or BFS listing."""
    info = require_algorithm(key)
    if key == "graph_traversal" and method:
        if method not in PSEUDOCODE_BY_METHOD:
            raise ValueError(f"Unknown traversal method: {method}")
        return PSEUDOCODE_BY_METHOD[method]
    return info.pseudocode


def pseudocode_line(key: str, line: Optional[int], method: Optional[str] = None) -> str:
    """Text of 1-based `line` in the listing ("" when out of range or None)."""
    listing = get_pseudocode(key, method)
    if line is None or not 1 <= line <= len(listing):
        return ""
    return listing[line - 1]


# ---------------------------------------------------------------------------
# Boundary functions
# ---------------------------------------------------------------------------
def _accepted(info: AlgoInfo, params: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in params.items() if k in info.params and v is not None}


def generate_log(key: str, data, **params) -> StepLog:
    """Run algorithm `key` on `data` and return its complete step log."""
    info = require_algorithm(key)
    log = info.fn(data, **_accepted(info, params))
    logger.debug("Generated %d steps for %s", len(log), key)
    return log


def build_structure(key: str, data, **params):
    """Tree / graph the replay of `key` is drawn on, or None for flat views."""
    info = require_algorithm(key)
    if info.build_structure is None:
        return None
    return info.build_structure(data, **_accepted(info, params))


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "require_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
    "get_pseudocode",
    "pseudocode_line",
    "generate_log",
    "build_structure",
]
