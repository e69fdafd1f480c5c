"""
bfs.py — Breadth-First Search
==============================
Queue-based BFS over an adjacency mapping (node id → neighbour ids, already
sorted ascending).  The queue holds (node, parent) pairs so the discovery
edge is recorded when a node leaves the queue, not when it enters it.
Records a step at every meaningful event:
  1. Seed: start enqueued and marked visited  →  queue, visit
  2. Dequeue a node (plus its parent edge)    →  dequeue, parent
  3. Examine each neighbour                   →  explore
  4. New neighbour discovered                 →  visit, queue
  5. Node's neighbour list exhausted          →  finish
"""

from collections import deque
from typing import Deque, List, Mapping, Optional, Sequence, Set, Tuple

from algorithms.step import StepLog, TraversalKind


PSEUDOCODE: List[str] = [
    "def bfs(graph, start):",                          # 1
    "    queue = deque([(start, None)])",              # 2
    "    visited = {start}",                           # 3
    "    while queue:",                                # 4
    "        node, parent = queue.popleft()",          # 5
    "        tree_edges.append((parent, node))",       # 6
    "        for neighbor in graph[node]:",            # 7
    "            if neighbor not in visited:",         # 8
    "                visited.add(neighbor)",           # 9
    "                queue.append((neighbor, node))",  # 10
    "        # every neighbour of node explored",      # 11
]


def bfs(adjacency: Mapping[str, Sequence[str]], start: str) -> StepLog:
    """Record a BFS from `start`."""
    log = StepLog()
    queue: Deque[Tuple[str, Optional[str]]] = deque([(start, None)])
    log.append(TraversalKind.QUEUE, start, line=2)
    visited: Set[str] = {start}
    log.append(TraversalKind.VISIT, start, line=3)

    while queue:
        node, parent = queue.popleft()
        log.append(TraversalKind.DEQUEUE, node, line=5)
        if parent is not None:
            log.append(TraversalKind.PARENT, parent, node, line=6)

        for neighbor in adjacency.get(node, []):
            log.append(TraversalKind.EXPLORE, node, neighbor, line=7)
            if neighbor not in visited:
                visited.add(neighbor)
                log.append(TraversalKind.VISIT, neighbor, line=9)
                queue.append((neighbor, node))
                log.append(TraversalKind.QUEUE, neighbor, line=10)

        log.append(TraversalKind.FINISH, node, line=11)

    return log
