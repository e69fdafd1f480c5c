"""
step.py — Step Log Model
=========================
Every instrumented algorithm records its run as a StepLog: an ordered,
append-only sequence of tagged Step records.  A Step does NOT carry the
visual state of the algorithm; it carries just enough payload (indices,
values, node ids) for the replay engine to rebuild that state by folding
over the log prefix.

    log = StepLog()
    log.append(SelectionKind.SS_OUTER_LOOP, 0, line=3)
    log.append(SelectionKind.SS_MIN_INIT, 0, line=4)

Design decisions:
  - One Enum per algorithm family.  The tag vocabulary of each family is
    closed; PAYLOAD_FIELDS names the fields of every tag and append()
    enforces the arity, so a malformed step never enters a log.
  - Step is frozen.  StepLog only ever grows through append(); there is
    no way to remove, reorder or edit an entry.
  - `line` is the 1-based line of the algorithm's PSEUDOCODE listing.
    It is used for highlighting only.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Tuple, Union


# ---------------------------------------------------------------------------
# Tag vocabularies — one closed Enum per algorithm family
# ---------------------------------------------------------------------------
class SelectionKind(Enum):
    SS_OUTER_LOOP    = "ss-outer-loop"
    SS_MIN_INIT      = "ss-min-init"
    SS_INNER_COMPARE = "ss-inner-compare"
    SS_MIN_UPDATE    = "ss-min-update"
    SS_SWAP          = "ss-swap"
    SS_SORTED        = "ss-sorted"
    FINISH           = "finish"


class MergeKind(Enum):
    MS_CALL    = "ms-call"
    MS_COMPARE = "ms-compare"
    MS_WRITE   = "ms-write"
    MS_RETURN  = "ms-return"


class QuickKind(Enum):
    QS_CALL               = "qs-call"
    QS_PIVOT_SELECT       = "qs-pivot-select"
    QS_PIVOT              = "qs-pivot"
    QS_POINTERS           = "qs-pointers"
    QS_COMPARE            = "qs-compare"
    QS_SWAP               = "qs-swap"
    QS_PARTITION_COMPLETE = "qs-partition-complete"
    QS_SORTED             = "qs-sorted"


class FibonacciKind(Enum):
    STACK_PUSH = "stack_push"
    CALL       = "call"
    RETURN     = "return"
    STACK_POP  = "stack_pop"


class TraversalKind(Enum):
    VISIT   = "visit"
    EXPLORE = "explore"
    QUEUE   = "queue"
    DEQUEUE = "dequeue"
    FINISH  = "finish"
    PARENT  = "parent"


StepKind = Union[SelectionKind, MergeKind, QuickKind, FibonacciKind, TraversalKind]


# ---------------------------------------------------------------------------
# Payload schema — field names per tag (the source line is not listed)
# ---------------------------------------------------------------------------
PAYLOAD_FIELDS: Dict[Any, Tuple[str, ...]] = {
    SelectionKind.SS_OUTER_LOOP:    ("i",),
    SelectionKind.SS_MIN_INIT:      ("min_idx",),
    SelectionKind.SS_INNER_COMPARE: ("j", "min_idx"),
    SelectionKind.SS_MIN_UPDATE:    ("min_idx",),
    SelectionKind.SS_SWAP:          ("i", "min_idx"),
    SelectionKind.SS_SORTED:        ("idx",),
    SelectionKind.FINISH:           (),

    MergeKind.MS_CALL:    ("node_id", "start", "end"),
    MergeKind.MS_COMPARE: ("node_id", "left_idx", "right_idx"),
    MergeKind.MS_WRITE:   ("node_id", "write_idx", "value"),
    MergeKind.MS_RETURN:  ("node_id",),

    QuickKind.QS_CALL:               ("node_id", "parent_id", "start", "end"),
    QuickKind.QS_PIVOT_SELECT:       ("node_id", "pivot_index", "pivot_value"),
    QuickKind.QS_PIVOT:              ("node_id", "pivot_index"),
    QuickKind.QS_POINTERS:           ("node_id", "i", "j"),
    QuickKind.QS_COMPARE:            ("node_id", "a", "b"),
    QuickKind.QS_SWAP:               ("node_id", "a", "b"),
    QuickKind.QS_PARTITION_COMPLETE: ("node_id", "pivot_final_index"),
    QuickKind.QS_SORTED:             ("node_id",),

    FibonacciKind.STACK_PUSH: ("node_id",),
    FibonacciKind.CALL:       ("node_id",),
    FibonacciKind.RETURN:     ("node_id", "result"),
    FibonacciKind.STACK_POP:  ("node_id",),

    TraversalKind.VISIT:   ("node",),
    TraversalKind.EXPLORE: ("node", "neighbor"),
    TraversalKind.QUEUE:   ("node",),
    TraversalKind.DEQUEUE: ("node",),
    TraversalKind.FINISH:  ("node",),
    TraversalKind.PARENT:  ("parent", "child"),
}


# Step kinds whose first payload field is a tree-node id
TREE_KINDS = (MergeKind, QuickKind, FibonacciKind)


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        kind    : Tag from one of the family Enums.
        payload : Ordered, fixed-arity fields (see PAYLOAD_FIELDS).
        line    : 1-based line of the canonical listing this step belongs to.
    """

    kind:    Any
    payload: Tuple[Any, ...] = ()
    line:    int             = 0

    @property
    def tag(self) -> str:
        return self.kind.value

    @property
    def node_id(self):
        """Tree-node id for merge / quick / fibonacci steps, else None."""
        if isinstance(self.kind, TREE_KINDS):
            return self.payload[0]
        return None

    def fields(self) -> Dict[str, Any]:
        return dict(zip(PAYLOAD_FIELDS[self.kind], self.payload))

    def to_list(self) -> List[Any]:
        return [self.kind.value, *self.payload, self.line]


# ---------------------------------------------------------------------------
# StepLog — the append-only accumulator threaded through each algorithm
# ---------------------------------------------------------------------------
class StepLog:
    """
    Ordered, append-only list of Steps produced by one algorithm run.

    The outermost call of an algorithm owns the log and passes it down to
    its recursive helpers; nothing else writes to it.
    """

    def __init__(self):
        self._steps: List[Step] = []

    def append(self, kind, *payload, line: int) -> Step:
        expected = PAYLOAD_FIELDS.get(kind)
        if expected is None:
            raise ValueError(f"Unknown step kind: {kind!r}")
        if len(payload) != len(expected):
            raise ValueError(
                f"{kind.value} expects {len(expected)} field(s) {expected}, got {len(payload)}"
            )
        step = Step(kind=kind, payload=tuple(payload), line=line)
        self._steps.append(step)
        return step

    # -- read-only access --
    @property
    def steps(self) -> Tuple[Step, ...]:
        return tuple(self._steps)

    def kinds(self) -> List[Any]:
        return [s.kind for s in self._steps]

    def count(self, kind) -> int:
        return sum(1 for s in self._steps if s.kind is kind)

    def node_ids(self) -> List[str]:
        """Every distinct tree-node id referenced by the log, in first-seen order."""
        seen: Dict[str, None] = {}
        for s in self._steps:
            nid = s.node_id
            if nid is not None:
                seen.setdefault(nid, None)
        return list(seen)

    def to_list(self) -> List[List[Any]]:
        return [s.to_list() for s in self._steps]

    # -- dunder --
    def __len__(self) -> int:
        return len(self._steps)

    def __getitem__(self, idx):
        return self._steps[idx]

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps)

    def __eq__(self, other) -> bool:
        return isinstance(other, StepLog) and self._steps == other._steps

    def __repr__(self) -> str:
        return f"StepLog(steps={len(self._steps)})"
