"""
recorder.py — Run Recorder & Analytics
========================================
Records one complete algorithm run (input, structure, step log), then
computes the numbers the analytics panel and Comparison Mode show.

Usage:
    rec = Recorder()
    rec.start("quick_sort", [8, 3, 5, 1], pivot_strategy="median")
    rec.metrics                      # RunMetrics, from the completed snapshot
    rec.snapshot(4)                  # replay state at step 4
    rec.export()                     # serialisable dump for save/replay
    rec.summary_text()               # the "Export Performance Stats" report

Comparison Mode:
    Run two Recorders on the SAME input (e.g. two pivot strategies), then
    compare(rec1, rec2) → ComparisonResult.
"""

import logging
import random
import sys
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from algorithms import AlgoInfo, build_structure, generate_log, require_algorithm
from algorithms.step import StepLog
from engine.replay import reconstruct
from graph import Graph, TreeNode

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:        str   = ""
    algo_label:      str   = ""
    input_size:      int   = 0
    total_steps:     int   = 0          # number of Steps in the log
    comparisons:     int   = 0
    swaps:           int   = 0          # selection / quick sort
    writes:          int   = 0          # merge sort
    calls:           int   = 0          # fibonacci
    nodes_visited:   int   = 0          # graph traversal
    edges_explored:  int   = 0
    wall_time_ms:    float = 0.0        # time to generate the log
    memory_bytes:    int   = 0          # approx size of the step buffer
    params:          Dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived: the label of the run with the lower number, or "tie"
    winner_steps:       str = ""
    winner_comparisons: str = ""
    winner_swaps:       str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        log       : StepLog of the run.
        structure : Tree / Graph the replay draws on (None for flat views).
        metrics   : RunMetrics, computed right after start().
        params    : Keyword parameters the run used, seed included.
    """

    def __init__(self):
        self.log:       Optional[StepLog]    = None
        self.structure: Any                  = None
        self.metrics:   Optional[RunMetrics] = None
        self.params:    Dict[str, Any]       = {}
        self.data:      Any                  = None

        self._algo_info: Optional[AlgoInfo] = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, data, **params) -> RunMetrics:
        """Generate the log for `data` and compute its metrics."""
        info = require_algorithm(algo_key)

        # the tree and the log must see the same pivot choices
        if params.get("pivot_strategy") == "random" and params.get("seed") is None:
            params["seed"] = random.randrange(2 ** 32)

        self._algo_info = info
        self.data       = list(data) if info.family == "sorting" else data
        self.params     = params
        self.structure  = build_structure(algo_key, self.data, **params)

        started  = time.monotonic()
        self.log = generate_log(algo_key, self.data, **params)
        wall_ms  = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        logger.info("Recorded %s: %d steps in %.2f ms", algo_key, len(self.log), wall_ms)
        return self.metrics

    def snapshot(self, index: int):
        """Replay state at `index` (len(log) gives the completed state)."""
        if self.log is None:
            raise RuntimeError("Call start() first.")
        return reconstruct(self._algo_info.key, self.log, index, **self._context())

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        if self.log is None:
            raise RuntimeError("Call start() first.")
        data = self.data.to_dict() if isinstance(self.data, Graph) else self.data
        structure = self.structure.to_dict() if self.structure is not None else None
        return {
            "algo_key":  self._algo_info.key,
            "params":    dict(self.params),
            "input":     data,
            "structure": structure,
            "metrics":   asdict(self.metrics),
            "steps":     self.log.to_list(),
        }

    def summary_text(self) -> str:
        """Plain-text performance report for the clipboard."""
        if self.log is None:
            raise RuntimeError("Call start() first.")
        info, m = self._algo_info, self.metrics
        lines = [f"Algorithm: {info.label}"]

        if info.family == "sorting":
            if "pivot_strategy" in info.params:
                lines.append(f"Pivot Strategy: {self.params.get('pivot_strategy', 'last')}")
            lines.append(f"Initial Array: [{', '.join(str(v) for v in self.data)}]")
            lines.append(f"Sorted Array: [{', '.join(str(v) for v in sorted(self.data))}]")
            lines += ["", "Performance:", f"  - Comparisons: {m.comparisons}"]
            if info.key == "merge_sort":
                lines.append(f"  - Writes: {m.writes}")
            else:
                lines.append(f"  - Swaps: {m.swaps}")
        elif info.family == "recursion":
            final = self.snapshot(len(self.log))
            lines.append(f"Result: fib({self.data}) = {final.result}")
            lines += ["", "Performance:", f"  - Calls: {m.calls}"]
        else:
            final = self.snapshot(len(self.log))
            lines.append(f"Method: {final.method.upper()}")
            lines.append(f"Start Node: {final.start_node}")
            lines.append(f"Visit Order: {', '.join(final.visited)}")
            lines += [
                "", "Performance:",
                f"  - Nodes Visited: {m.nodes_visited}",
                f"  - Edges Explored: {m.edges_explored}",
            ]

        lines.append(f"  - Steps: {m.total_steps}")
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _context(self) -> Dict[str, Any]:
        ctx = dict(self.params)
        if self._algo_info.family == "sorting":
            ctx["array"] = self.data
        elif self._algo_info.key == "fibonacci":
            ctx["n"] = self.data
        if isinstance(self.structure, TreeNode):
            ctx["tree"] = self.structure
        elif isinstance(self.structure, Graph):
            ctx["graph"] = self.structure
        return ctx

    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        final = self.snapshot(len(self.log))

        if isinstance(self.data, Graph):
            input_size = self.data.node_count()
        elif isinstance(self.data, int):
            input_size = self.data
        else:
            input_size = len(self.data)

        # approximate memory: sizeof the steps buffer
        mem = sys.getsizeof(self.log.steps)
        for s in self.log:
            mem += sys.getsizeof(s)

        return RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            input_size=input_size,
            total_steps=len(self.log),
            comparisons=getattr(final, "comparisons", 0),
            swaps=getattr(final, "swaps", 0),
            writes=getattr(final, "writes", 0),
            calls=getattr(final, "call_count", 0),
            nodes_visited=len(getattr(final, "visited", ())),
            edges_explored=getattr(final, "edges_explored", 0),
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
            params={k: v for k, v in self.params.items() if k != "seed"},
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two started Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()
    l_name = _run_name(l)
    r_name = _run_name(r)

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return l_name if l_val < r_val else r_name

    return ComparisonResult(
        left=l,
        right=r,
        winner_steps=winner(l.total_steps, r.total_steps),
        winner_comparisons=winner(l.comparisons, r.comparisons),
        winner_swaps=winner(l.swaps, r.swaps),
    )


def _run_name(m: RunMetrics) -> str:
    """Label plus the distinguishing parameter, e.g. "Quick Sort (median)"."""
    detail = m.params.get("pivot_strategy") or m.params.get("method")
    return f"{m.algo_label} ({detail})" if detail else m.algo_label
