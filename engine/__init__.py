"""
engine/
-------
Replay, playback & recording layer.

    from engine import reconstruct, Stepper, Recorder, compare
"""

from engine.snapshot import (
    NodeStatus,
    SelectionSnapshot,
    MergeNodeState,
    MergeSortSnapshot,
    QuickNodeState,
    QuickSortSnapshot,
    FibonacciSnapshot,
    TraversalSnapshot,
)
from engine.replay import (
    StructureMismatchError,
    reconstruct,
    reconstruct_selection_sort,
    reconstruct_merge_sort,
    reconstruct_quick_sort,
    reconstruct_fibonacci,
    reconstruct_traversal,
)
from engine.stepper  import Stepper, StepperState, SPEED_PRESETS
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "NodeStatus",
    "SelectionSnapshot",
    "MergeNodeState",
    "MergeSortSnapshot",
    "QuickNodeState",
    "QuickSortSnapshot",
    "FibonacciSnapshot",
    "TraversalSnapshot",
    "StructureMismatchError",
    "reconstruct",
    "reconstruct_selection_sort",
    "reconstruct_merge_sort",
    "reconstruct_quick_sort",
    "reconstruct_fibonacci",
    "reconstruct_traversal",
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
