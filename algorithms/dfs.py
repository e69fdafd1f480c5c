"""
dfs.py — Depth-First Search
=============================
Recursive DFS over an adjacency mapping (node id → neighbour ids, already
sorted ascending).

Records:
  1. Every call entry, before the visited check  →  visit
  2. Node marked visited                         →  visit (again)
  3. First discovery edge                        →  parent
  4. Each neighbour examined                     →  explore
  5. All neighbours explored                     →  finish

The entry `visit` exists for line highlighting; the replay engine counts
a node as visited once no matter how many visit steps name it.
"""

from typing import Dict, List, Mapping, Optional, Sequence, Set

from algorithms.step import StepLog, TraversalKind


PSEUDOCODE: List[str] = [
    "def dfs(graph, start):",                                  # 1
    "    visited = set()",                                     # 2
    "    parent = {}",                                         # 3
    "    traverse(start, None)",                               # 4
    "",                                                        # 5
    "def traverse(node, came_from):",                          # 6
    "    if node in visited:",                                 # 7
    "        return",                                          # 8
    "    visited.add(node)",                                   # 9
    "    if came_from is not None and node not in parent:",    # 10
    "        parent[node] = came_from",                        # 11
    "    for neighbor in graph[node]:",                        # 12
    "        if neighbor not in visited:",                     # 13
    "            traverse(neighbor, node)",                    # 14
    "    # every neighbour of node explored",                  # 15
]


def dfs(adjacency: Mapping[str, Sequence[str]], start: str) -> StepLog:
    """Record a recursive DFS from `start`."""
    log = StepLog()
    visited: Set[str] = set()
    parent: Dict[str, str] = {}
    _traverse(adjacency, start, None, visited, parent, log)
    return log


def _traverse(
    adjacency: Mapping[str, Sequence[str]],
    node: str,
    came_from: Optional[str],
    visited: Set[str],
    parent: Dict[str, str],
    log: StepLog,
) -> None:
    log.append(TraversalKind.VISIT, node, line=7)
    if node in visited:
        return

    visited.add(node)
    log.append(TraversalKind.VISIT, node, line=9)
    # first discoverer wins
    if came_from is not None and node not in parent:
        parent[node] = came_from
        log.append(TraversalKind.PARENT, came_from, node, line=11)

    for neighbor in adjacency.get(node, []):
        log.append(TraversalKind.EXPLORE, node, neighbor, line=12)
        if neighbor not in visited:
            _traverse(adjacency, neighbor, node, visited, parent, log)

    log.append(TraversalKind.FINISH, node, line=15)
