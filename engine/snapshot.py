"""
snapshot.py — Render-ready Replay State
========================================
A snapshot is everything a view needs to draw one point of a step log:
arrays, per-node statuses, highlights, counters and a one-line
explanation.  Snapshots are produced by engine.replay and never mutated
afterwards; `to_dict()` gives the JSON form the web layer sends out.

Persistent fields accumulate over the whole log prefix.  Transient
fields (the ones documented as "current step only") are filled from the
step at the requested index and nothing else.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class NodeStatus(Enum):
    """Lifecycle of one recursive call in the sort / fibonacci trees."""
    INACTIVE     = "inactive"
    CALLING      = "calling"
    PARTITIONING = "partitioning"
    MERGING      = "merging"
    WAITING      = "waiting"
    CONQUERING   = "conquering"
    RETURNED     = "returned"
    SORTED       = "sorted"


def _plain(value):
    """Enums → their value, containers recursively."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


class _Serialisable:
    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


# ---------------------------------------------------------------------------
# Selection sort — flat array
# ---------------------------------------------------------------------------
@dataclass
class SelectionSnapshot(_Serialisable):
    """
    Persistent:
        array, sorted_indices, i, j, min_idx, comparisons, swaps,
        pass_comparisons (comparisons within the current outer pass)
    Current step only:
        comparing, swapping, min_updated
    """

    step_index:       int             = 0
    array:            List[float]     = field(default_factory=list)
    sorted_indices:   List[int]       = field(default_factory=list)
    i:                Optional[int]   = None
    j:                Optional[int]   = None
    min_idx:          Optional[int]   = None
    comparing:        List[int]       = field(default_factory=list)
    swapping:         List[int]       = field(default_factory=list)
    min_updated:      bool            = False
    comparisons:      int             = 0
    pass_comparisons: int             = 0
    swaps:            int             = 0
    line:             Optional[int]   = None
    explanation:      str             = ""
    completed:        bool            = False


# ---------------------------------------------------------------------------
# Merge sort — one sub-array per recursion-tree node
# ---------------------------------------------------------------------------
@dataclass
class MergeNodeState(_Serialisable):
    id:          str
    start:       int
    end:         int
    parent_id:   Optional[str]   = None
    array:       List[float]     = field(default_factory=list)
    status:      NodeStatus      = NodeStatus.INACTIVE
    highlight:   Optional[int]   = None    # current step only
    merged:      List[float]     = field(default_factory=list)   # merge buffer, written prefix
    written:     int             = 0


@dataclass
class MergeSortSnapshot(_Serialisable):
    step_index:   int                        = 0
    array:        List[float]                = field(default_factory=list)
    nodes:        Dict[str, MergeNodeState]  = field(default_factory=dict)
    active_node:  Optional[str]              = None
    comparisons:  int                        = 0
    writes:       int                        = 0
    line:         Optional[int]              = None
    explanation:  str                        = ""
    completed:    bool                       = False


# ---------------------------------------------------------------------------
# Quick sort — global array plus one slice view per partition-tree node
# ---------------------------------------------------------------------------
@dataclass
class QuickNodeState(_Serialisable):
    """
    Indices inside a node (pivot_index, pointers, comparing, swapping,
    pivot_candidate) are relative to the node's own slice.
    """

    id:              str
    start:           int
    end:             int
    parent_id:       Optional[str]  = None
    array:           List[float]    = field(default_factory=list)
    status:          NodeStatus     = NodeStatus.INACTIVE
    pivot_index:     Optional[int]  = None
    # current step only
    pointer_i:       Optional[int]  = None
    pointer_j:       Optional[int]  = None
    pivot_candidate: Optional[int]  = None
    comparing:       List[int]      = field(default_factory=list)
    swapping:        List[int]      = field(default_factory=list)


@dataclass
class QuickSortSnapshot(_Serialisable):
    step_index:      int                        = 0
    array:           List[float]                = field(default_factory=list)
    nodes:           Dict[str, QuickNodeState]  = field(default_factory=dict)
    active_node:     Optional[str]              = None
    pivot_strategy:  str                        = "last"
    comparisons:     int                        = 0
    swaps:           int                        = 0
    line:            Optional[int]              = None
    explanation:     str                        = ""
    completed:       bool                       = False


# ---------------------------------------------------------------------------
# Fibonacci — call tree
# ---------------------------------------------------------------------------
@dataclass
class FibonacciSnapshot(_Serialisable):
    step_index:   int                       = 0
    node_states:  Dict[str, NodeStatus]     = field(default_factory=dict)
    results:      Dict[str, int]            = field(default_factory=dict)
    returned:     List[str]                 = field(default_factory=list)
    call_stack:   List[str]                 = field(default_factory=list)
    active_node:  Optional[str]             = None
    call_count:   int                       = 0
    result:       Optional[int]             = None
    line:         Optional[int]             = None
    explanation:  str                       = ""
    completed:    bool                      = False


# ---------------------------------------------------------------------------
# Graph traversal — DFS / BFS
# ---------------------------------------------------------------------------
@dataclass
class TraversalSnapshot(_Serialisable):
    step_index:      int                          = 0
    method:          str                          = "dfs"
    start_node:      Optional[str]                = None
    current_node:    Optional[str]                = None
    visited:         List[str]                    = field(default_factory=list)
    finished:        List[str]                    = field(default_factory=list)
    parents:         Dict[str, str]               = field(default_factory=dict)
    tree_edges:      List[Tuple[str, str]]        = field(default_factory=list)
    queue:           List[str]                    = field(default_factory=list)
    stack:           List[str]                    = field(default_factory=list)
    exploring_edge:  Optional[Tuple[str, str]]    = None   # current step only
    node_states:     Dict[str, str]               = field(default_factory=dict)
    edge_states:     Dict[str, str]               = field(default_factory=dict)
    edges_explored:  int                          = 0
    line:            Optional[int]                = None
    explanation:     str                          = ""
    completed:       bool                         = False

    @property
    def nodes_visited(self) -> int:
        return len(self.visited)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["nodes_visited"] = self.nodes_visited
        return data
