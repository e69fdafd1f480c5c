"""
replay.py — Replay State Reconstruction
========================================
Turns (step log, index) into a render-ready snapshot by folding the log
from the start up to and including `index`.  Nothing is cached between
calls: asking for the same index twice always refolds and always gives
an equal snapshot, so scrubbing backwards is as safe as stepping forward.

Two rules shape every reconstructor:

  * Highlights (comparing / swapping indices, pointers, the exploring
    edge, the active node) come from the step AT `index` only.  Earlier
    steps contribute counters, visited sets, statuses and array contents.
  * `index == len(log)` (or beyond) is the completed pseudo-step: the
    whole log is folded and then terminal state is set explicitly
    (everything sorted / returned / finished, highlights cleared).

Explanations are written from the state just BEFORE the current step
takes effect, so a swap reads "Swap 5 and 3" rather than "Swap 3 and 5".
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from algorithms.step import (
    FibonacciKind,
    MergeKind,
    QuickKind,
    SelectionKind,
    Step,
    StepLog,
    TraversalKind,
)
from algorithms.quick_sort import build_quick_sort_tree
from algorithms.traversal import METHODS
from engine.snapshot import (
    FibonacciSnapshot,
    MergeNodeState,
    MergeSortSnapshot,
    NodeStatus,
    QuickNodeState,
    QuickSortSnapshot,
    SelectionSnapshot,
    TraversalSnapshot,
)
from graph import EdgeState, Graph, NodeState, TreeNode, build_fibonacci_tree, build_merge_sort_tree, child_id

logger = logging.getLogger(__name__)


class StructureMismatchError(RuntimeError):
    """A step names a tree-node id that the supplied tree does not contain."""


def _window(log: StepLog, index: int) -> Tuple[int, bool]:
    """Last log position to fold, and whether `index` is the completed pseudo-step."""
    if index < 0:
        raise ValueError(f"Replay index must be >= 0, got {index}")
    completed = index >= len(log)
    return (len(log) - 1 if completed else index), completed


def _lookup(nodes: Dict[str, object], step: Step, node_id: Optional[str] = None):
    node_id = step.node_id if node_id is None else node_id
    try:
        return nodes[node_id]
    except KeyError:
        raise StructureMismatchError(
            f"{step.tag} step refers to node {node_id!r}, which is not in the tree"
        ) from None


def _rel(node, idx: Optional[int]) -> Optional[int]:
    """Global array index → index inside the node's slice."""
    return None if idx is None else idx - node.start


def _unexpected(step: Step, family: str) -> ValueError:
    return ValueError(f"Unexpected {step.tag!r} step in a {family} log")


# ---------------------------------------------------------------------------
# Selection sort
# ---------------------------------------------------------------------------
def reconstruct_selection_sort(log: StepLog, index: int, array: Sequence[float]) -> SelectionSnapshot:
    last, completed = _window(log, index)
    snap = SelectionSnapshot(step_index=index, array=list(array))
    arr = snap.array

    for k in range(last + 1):
        step = log[k]
        current = k == index
        if current:
            snap.line = step.line
            snap.explanation = _explain_selection(step, arr)

        kind = step.kind
        if kind is SelectionKind.SS_OUTER_LOOP:
            snap.i, = step.payload
            snap.j = None
            snap.pass_comparisons = 0
        elif kind is SelectionKind.SS_MIN_INIT:
            snap.min_idx, = step.payload
        elif kind is SelectionKind.SS_INNER_COMPARE:
            snap.j, snap.min_idx = step.payload
            snap.comparisons += 1
            snap.pass_comparisons += 1
            if current:
                snap.comparing = [snap.j, snap.min_idx]
        elif kind is SelectionKind.SS_MIN_UPDATE:
            snap.min_idx, = step.payload
            if current:
                snap.min_updated = True
        elif kind is SelectionKind.SS_SWAP:
            i, m = step.payload
            arr[i], arr[m] = arr[m], arr[i]
            snap.swaps += 1
            if current:
                snap.swapping = [i, m]
        elif kind is SelectionKind.SS_SORTED:
            idx, = step.payload
            if idx not in snap.sorted_indices:
                snap.sorted_indices.append(idx)
        elif kind is SelectionKind.FINISH:
            pass
        else:
            raise _unexpected(step, "selection sort")

    if completed:
        snap.array = sorted(array)
        snap.sorted_indices = list(range(len(array)))
        snap.i = snap.j = snap.min_idx = None
        snap.line = None
        snap.completed = True
        snap.explanation = (
            f"Array sorted with {snap.comparisons} comparison(s) and {snap.swaps} swap(s)."
        )
    return snap


def _explain_selection(step: Step, arr: List[float]) -> str:
    kind = step.kind
    if kind is SelectionKind.SS_OUTER_LOOP:
        i, = step.payload
        return f"Pass {i + 1}: find the smallest value in positions {i}..{len(arr) - 1}."
    if kind is SelectionKind.SS_MIN_INIT:
        m, = step.payload
        return f"Assume arr[{m}] = {arr[m]} is the minimum."
    if kind is SelectionKind.SS_INNER_COMPARE:
        j, m = step.payload
        return f"Compare arr[{j}] = {arr[j]} with the current minimum arr[{m}] = {arr[m]}."
    if kind is SelectionKind.SS_MIN_UPDATE:
        m, = step.payload
        return f"New minimum found: arr[{m}] = {arr[m]}."
    if kind is SelectionKind.SS_SWAP:
        i, m = step.payload
        return f"Swap arr[{i}] = {arr[i]} with the minimum arr[{m}] = {arr[m]}."
    if kind is SelectionKind.SS_SORTED:
        idx, = step.payload
        return f"arr[{idx}] = {arr[idx]} is in its final position."
    return "Selection sort finished."


# ---------------------------------------------------------------------------
# Merge sort
# ---------------------------------------------------------------------------
def reconstruct_merge_sort(
    log: StepLog,
    index: int,
    array: Sequence[float],
    tree: Optional[TreeNode] = None,
) -> MergeSortSnapshot:
    if tree is None:
        tree = build_merge_sort_tree(0, len(array) - 1)
    last, completed = _window(log, index)

    nodes = {
        n.id: MergeNodeState(id=n.id, start=n.start, end=n.end, parent_id=n.parent_id)
        for n in tree.walk()
    }
    snap = MergeSortSnapshot(step_index=index, array=list(array), nodes=nodes)

    for k in range(last + 1):
        step = log[k]
        current = k == index
        node = _lookup(nodes, step)
        if current:
            snap.line = step.line
            snap.active_node = node.id
            snap.explanation = _explain_merge(step, node, nodes, array)

        kind = step.kind
        if kind is MergeKind.MS_CALL:
            if node.status is NodeStatus.INACTIVE:
                node.status = NodeStatus.CALLING
                node.array = list(array[node.start:node.end + 1])
        elif kind is MergeKind.MS_COMPARE:
            _, left_idx, right_idx = step.payload
            snap.comparisons += 1
            node.status = NodeStatus.MERGING
            if current:
                _lookup(nodes, step, child_id(node.id, 0)).highlight = left_idx
                _lookup(nodes, step, child_id(node.id, 1)).highlight = right_idx
        elif kind is MergeKind.MS_WRITE:
            _, write_idx, value = step.payload
            node.merged = node.merged[:write_idx] + [value]
            node.written = len(node.merged)
            node.status = NodeStatus.MERGING
            snap.writes += 1
            if current:
                node.highlight = write_idx
        elif kind is MergeKind.MS_RETURN:
            node.status = NodeStatus.RETURNED
            if node.merged:
                node.array = list(node.merged)
        else:
            raise _unexpected(step, "merge sort")

    snap.array = _merge_overlay(tree, nodes, array)

    if completed:
        for node in nodes.values():
            node.status = NodeStatus.RETURNED
            node.array = sorted(array[node.start:node.end + 1])
            node.merged = list(node.array) if node.end > node.start else []
            node.written = len(node.merged)
            node.highlight = None
        snap.array = sorted(array)
        snap.active_node = None
        snap.line = None
        snap.completed = True
        snap.explanation = (
            f"Merge sort complete: {snap.comparisons} comparison(s), {snap.writes} write(s)."
        )
    return snap


def _merge_overlay(tree: TreeNode, nodes, array: Sequence[float]) -> List[float]:
    """
    The input with every returned range laid over it, outermost last.
    Merge buffers stay on their nodes, so the result is always a permutation.
    """
    out = list(array)
    for t in reversed(list(tree.walk())):
        node = nodes[t.id]
        if node.status is NodeStatus.RETURNED:
            out[node.start:node.end + 1] = node.array
    return out


def _explain_merge(step: Step, node: MergeNodeState, nodes, array: Sequence[float]) -> str:
    kind = step.kind
    start, end = node.start, node.end
    if kind is MergeKind.MS_CALL:
        middle = (start + end) // 2
        if step.line == 5:
            return f"Sort the left half [{start}, {middle}] first."
        if step.line == 6:
            return f"Left half done. Sort the right half [{middle + 1}, {end}]."
        if step.line == 7:
            return f"Both halves of [{start}, {end}] are sorted. Merge them."
        return f"merge_sort({start}, {end}) called on {list(array[start:end + 1])}."
    if kind is MergeKind.MS_COMPARE:
        _, i, j = step.payload
        left = nodes[child_id(node.id, 0)].array[i]
        right = nodes[child_id(node.id, 1)].array[j]
        side = "left" if left <= right else "right"
        return f"Compare {left} and {right}: take {min(left, right)} from the {side} half."
    if kind is MergeKind.MS_WRITE:
        _, w, value = step.payload
        return f"Write {value} to position {w} of the merged range [{start}, {end}]."
    if start >= end:
        return f"Single element {array[start]} is already sorted."
    return f"Range [{start}, {end}] merged: {node.merged}."


# ---------------------------------------------------------------------------
# Quick sort
# ---------------------------------------------------------------------------
def reconstruct_quick_sort(
    log: StepLog,
    index: int,
    array: Sequence[float],
    tree: Optional[TreeNode] = None,
    pivot_strategy: str = "last",
    seed: Optional[int] = None,
) -> QuickSortSnapshot:
    """
    The `random` strategy only lines up with its log when the same seed
    (or the tree built from it) is passed in.
    """
    if tree is None:
        tree = build_quick_sort_tree(array, pivot_strategy, seed)
    last, completed = _window(log, index)

    nodes = {
        n.id: QuickNodeState(id=n.id, start=n.start, end=n.end, parent_id=n.parent_id)
        for n in tree.walk()
    }
    has_children = {n.id: bool(n.children) for n in tree.walk()}
    arr = list(array)
    snap = QuickSortSnapshot(step_index=index, nodes=nodes, pivot_strategy=pivot_strategy)

    for k in range(last + 1):
        step = log[k]
        current = k == index
        node = _lookup(nodes, step)
        if current:
            snap.line = step.line
            snap.active_node = node.id
            snap.explanation = _explain_quick(step, node, arr, pivot_strategy)

        kind = step.kind
        if kind is QuickKind.QS_CALL:
            if node.status is NodeStatus.INACTIVE:
                node.status = NodeStatus.CALLING
        elif kind is QuickKind.QS_PIVOT_SELECT:
            if current:
                node.pivot_candidate = _rel(node, step.payload[1])
        elif kind is QuickKind.QS_PIVOT:
            node.status = NodeStatus.PARTITIONING
            node.pivot_index = _rel(node, step.payload[1])
        elif kind is QuickKind.QS_POINTERS:
            if current:
                node.pointer_i = _rel(node, step.payload[1])
                node.pointer_j = _rel(node, step.payload[2])
        elif kind is QuickKind.QS_COMPARE:
            _, a, b = step.payload
            snap.comparisons += 1
            if current:
                node.comparing = [_rel(node, a), _rel(node, b)]
        elif kind is QuickKind.QS_SWAP:
            _, a, b = step.payload
            arr[a], arr[b] = arr[b], arr[a]
            snap.swaps += 1
            if current:
                node.swapping = [_rel(node, a), _rel(node, b)]
        elif kind is QuickKind.QS_PARTITION_COMPLETE:
            node.status = NodeStatus.WAITING
            node.pivot_index = _rel(node, step.payload[1])
        elif kind is QuickKind.QS_SORTED:
            if current and has_children[node.id]:
                node.status = NodeStatus.CONQUERING
            else:
                node.status = NodeStatus.SORTED
        else:
            raise _unexpected(step, "quick sort")

    if completed:
        arr = sorted(array)
        for node in nodes.values():
            node.status = NodeStatus.SORTED
        snap.active_node = None
        snap.line = None
        snap.completed = True
        snap.explanation = (
            f"Quick sort complete ({pivot_strategy} pivot): "
            f"{snap.comparisons} comparison(s), {snap.swaps} swap(s)."
        )

    for node in nodes.values():
        if node.status is not NodeStatus.INACTIVE:
            node.array = arr[node.start:node.end + 1]
    snap.array = arr
    return snap


def _explain_quick(step: Step, node: QuickNodeState, arr: List[float], strategy: str) -> str:
    kind = step.kind
    start, end = node.start, node.end
    if kind is QuickKind.QS_CALL:
        if start > end:
            return f"quick_sort({start}, {end}): empty range, nothing to do."
        if start == end:
            return f"quick_sort({start}, {end}): single element {arr[start]}."
        return f"quick_sort({start}, {end}) on {arr[start:end + 1]}."
    if kind is QuickKind.QS_PIVOT_SELECT:
        _, idx, value = step.payload
        return f"Pivot strategy '{strategy}' picks {value} at index {idx}."
    if kind is QuickKind.QS_PIVOT:
        _, idx = step.payload
        return f"Partition [{start}, {end}] around pivot {arr[idx]}."
    if kind is QuickKind.QS_POINTERS:
        _, i, j = step.payload
        if i is None and j is None:
            return "Partition finished; pointers cleared."
        return f"i = {i}, j = {j}."
    if kind is QuickKind.QS_COMPARE:
        _, a, b = step.payload
        if step.line == 3:
            return f"Median of three: compare {arr[a]} (index {a}) with {arr[b]} (index {b})."
        verdict = "yes" if arr[a] < arr[b] else "no"
        return f"Is {arr[a]} < pivot {arr[b]}? {verdict.capitalize()}."
    if kind is QuickKind.QS_SWAP:
        _, a, b = step.payload
        if a == b:
            return f"{arr[a]} stays at index {a}."
        return f"Swap {arr[a]} (index {a}) and {arr[b]} (index {b})."
    if kind is QuickKind.QS_PARTITION_COMPLETE:
        _, p = step.payload
        return f"Pivot {arr[p]} is in its final position {p}."
    return f"Range [{start}, {end}] is sorted."


# ---------------------------------------------------------------------------
# Fibonacci
# ---------------------------------------------------------------------------
def reconstruct_fibonacci(log: StepLog, index: int, tree: TreeNode) -> FibonacciSnapshot:
    last, completed = _window(log, index)
    values = {n.id: n.value for n in tree.walk()}
    snap = FibonacciSnapshot(
        step_index=index,
        node_states={node_id: NodeStatus.INACTIVE for node_id in values},
    )
    states = snap.node_states

    for k in range(last + 1):
        step = log[k]
        current = k == index
        node_id = step.node_id
        _lookup(states, step)
        if current:
            snap.line = step.line
            snap.active_node = node_id
            snap.explanation = _explain_fibonacci(step, values, snap.results)

        kind = step.kind
        if kind is FibonacciKind.STACK_PUSH:
            snap.call_stack.append(node_id)
            snap.call_count += 1
        elif kind is FibonacciKind.CALL:
            if states[node_id] is NodeStatus.INACTIVE:
                states[node_id] = NodeStatus.CALLING
        elif kind is FibonacciKind.RETURN:
            snap.results[node_id] = step.payload[1]
            states[node_id] = NodeStatus.RETURNED
            if node_id not in snap.returned:
                snap.returned.append(node_id)
        elif kind is FibonacciKind.STACK_POP:
            if snap.call_stack and snap.call_stack[-1] == node_id:
                snap.call_stack.pop()
        else:
            raise _unexpected(step, "fibonacci")

    snap.result = snap.results.get(tree.id)

    if completed:
        for node_id in states:
            states[node_id] = NodeStatus.RETURNED
        snap.call_stack = []
        snap.active_node = None
        snap.line = None
        snap.completed = True
        snap.explanation = (
            f"fib({tree.value}) = {snap.result} after {snap.call_count} call(s)."
        )
    return snap


def _explain_fibonacci(step: Step, values: Dict[str, int], results: Dict[str, int]) -> str:
    node_id = step.node_id
    n = values[node_id]
    kind = step.kind
    if kind is FibonacciKind.STACK_PUSH:
        return f"Push fib({n}) onto the call stack."
    if kind is FibonacciKind.CALL:
        if step.line == 5:
            return f"fib({n}) resumes: fib({n - 1}) is known, now call fib({n - 2})."
        return f"Call fib({n})."
    if kind is FibonacciKind.RETURN:
        result = step.payload[1]
        if n <= 1:
            return f"Base case: fib({n}) = {result}."
        left = results.get(child_id(node_id, 0))
        right = results.get(child_id(node_id, 1))
        return f"fib({n}) = fib({n - 1}) + fib({n - 2}) = {left} + {right} = {result}."
    return f"Pop fib({n}) off the call stack."


# ---------------------------------------------------------------------------
# Graph traversal
# ---------------------------------------------------------------------------
def reconstruct_traversal(
    log: StepLog,
    index: int,
    method: str = "dfs",
    start_node: Optional[str] = None,
    graph: Optional[Graph] = None,
) -> TraversalSnapshot:
    """
    With `graph`, every node and edge gets a state (unvisited / default
    until the traversal touches it) and undirected tree edges are keyed
    by the id of the edge actually stored in the graph.
    """
    if method not in METHODS:
        raise ValueError(f"Unknown traversal method: {method}")
    last, completed = _window(log, index)
    if start_node is None and len(log):
        start_node = log[0].payload[0]

    snap = TraversalSnapshot(step_index=index, method=method, start_node=start_node)
    visited_set = set()

    for k in range(last + 1):
        step = log[k]
        current = k == index
        if current:
            snap.line = step.line
            snap.explanation = _explain_traversal(step, visited_set)

        kind = step.kind
        if kind is TraversalKind.VISIT:
            node, = step.payload
            if node not in visited_set:
                visited_set.add(node)
                snap.visited.append(node)
                if method == "dfs":
                    snap.stack.append(node)
            if method == "dfs":
                snap.current_node = node
        elif kind is TraversalKind.EXPLORE:
            node, neighbor = step.payload
            snap.edges_explored += 1
            snap.current_node = node
            if current:
                snap.exploring_edge = (node, neighbor)
        elif kind is TraversalKind.QUEUE:
            snap.queue.append(step.payload[0])
        elif kind is TraversalKind.DEQUEUE:
            node, = step.payload
            if node in snap.queue:
                snap.queue.remove(node)
            snap.current_node = node
        elif kind is TraversalKind.FINISH:
            node, = step.payload
            if node not in snap.finished:
                snap.finished.append(node)
            if snap.stack and snap.stack[-1] == node:
                snap.stack.pop()
            snap.current_node = node
        elif kind is TraversalKind.PARENT:
            parent, child = step.payload
            snap.parents[child] = parent
            snap.tree_edges.append((parent, child))
        else:
            raise _unexpected(step, "traversal")

    if index == 0 and not completed:
        snap.explanation = f"Starting {method.upper()} from node {start_node}."

    if completed:
        for node in snap.visited:
            if node not in snap.finished:
                snap.finished.append(node)
        snap.queue = []
        snap.stack = []
        snap.current_node = None
        snap.exploring_edge = None
        snap.line = None
        snap.completed = True
        order = " → ".join(snap.visited)
        snap.explanation = (
            f"{method.upper()} complete: visited {len(snap.visited)} node(s) in order {order}."
        )

    snap.node_states = _traversal_node_states(snap, graph)
    snap.edge_states = _traversal_edge_states(snap, graph)
    return snap


def _traversal_node_states(snap: TraversalSnapshot, graph: Optional[Graph] = None) -> Dict[str, str]:
    states: Dict[str, str] = {}
    if graph is not None:
        states = {nid: NodeState.UNVISITED.value for nid in graph.nodes}
    if snap.start_node is not None:
        states[snap.start_node] = NodeState.START.value
    finished = set(snap.finished)
    queued = set(snap.queue)
    for node in snap.visited:
        if node in finished:
            states[node] = NodeState.FINISHED.value
        elif node in queued:
            states[node] = NodeState.QUEUED.value
        else:
            states[node] = NodeState.VISITED.value
    if snap.current_node is not None:
        states[snap.current_node] = NodeState.CURRENT.value
    return states


def _edge_key(graph: Optional[Graph], a: str, b: str) -> str:
    if graph is not None:
        edge = graph.get_edge_between(a, b)
        if edge is not None:
            return edge.id
    return f"{a}-{b}"


def _traversal_edge_states(snap: TraversalSnapshot, graph: Optional[Graph] = None) -> Dict[str, str]:
    states: Dict[str, str] = {}
    if graph is not None:
        states = {e.id: EdgeState.DEFAULT.value for e in graph.edges}
    for p, c in snap.tree_edges:
        states[_edge_key(graph, p, c)] = EdgeState.TREE.value
    if snap.exploring_edge is not None:
        states[_edge_key(graph, *snap.exploring_edge)] = EdgeState.EXPLORING.value
    return states


def _explain_traversal(step: Step, visited) -> str:
    kind = step.kind
    if kind is TraversalKind.VISIT:
        node, = step.payload
        if node in visited:
            return f"Mark {node} as visited."
        return f"Visit {node}."
    if kind is TraversalKind.EXPLORE:
        node, neighbor = step.payload
        if neighbor in visited:
            return f"Explore edge {node} → {neighbor}: {neighbor} is already visited."
        return f"Explore edge {node} → {neighbor}: {neighbor} is new."
    if kind is TraversalKind.QUEUE:
        return f"Enqueue {step.payload[0]}."
    if kind is TraversalKind.DEQUEUE:
        return f"Dequeue {step.payload[0]} and examine its neighbours."
    if kind is TraversalKind.FINISH:
        return f"Every neighbour of {step.payload[0]} explored."
    parent, child = step.payload
    return f"{child} was discovered from {parent}."


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------
def _require(context: dict, name: str, key: str):
    if context.get(name) is None:
        raise ValueError(f"Replaying {key} needs '{name}'")
    return context[name]


def reconstruct(key: str, log: StepLog, index: int, **context):
    """
    Snapshot of algorithm `key` at `index`.

    context keys:
        array                    – sort families (the original input)
        tree                     – merge / quick / fibonacci (built when absent)
        pivot_strategy, seed     – quick sort
        n                        – fibonacci, when no tree is given
        method, start_node       – graph traversal
        graph                    – graph traversal, for full node / edge states
    """
    if key == "selection_sort":
        snap = reconstruct_selection_sort(log, index, _require(context, "array", key))
    elif key == "merge_sort":
        snap = reconstruct_merge_sort(log, index, _require(context, "array", key), context.get("tree"))
    elif key == "quick_sort":
        snap = reconstruct_quick_sort(
            log, index, _require(context, "array", key),
            tree=context.get("tree"),
            pivot_strategy=context.get("pivot_strategy") or "last",
            seed=context.get("seed"),
        )
    elif key == "fibonacci":
        tree = context.get("tree")
        if tree is None:
            tree = build_fibonacci_tree(_require(context, "n", key))
        snap = reconstruct_fibonacci(log, index, tree)
    elif key == "graph_traversal":
        snap = reconstruct_traversal(
            log, index,
            method=context.get("method") or "dfs",
            start_node=context.get("start_node"),
            graph=context.get("graph"),
        )
    else:
        raise ValueError(f"Unknown algorithm: {key}")

    logger.debug("Reconstructed %s at %d of %d", key, index, len(log))
    return snap
