"""
traversal.py — Graph Traversal entry point
===========================================
One generator for the graph-traversal family; `method` picks DFS or BFS.
"""

from typing import Dict, List, Mapping, Sequence

from algorithms.bfs import bfs, PSEUDOCODE as BFS_PSEUDOCODE
from algorithms.dfs import dfs, PSEUDOCODE as DFS_PSEUDOCODE
from algorithms.step import StepLog

METHODS = ("dfs", "bfs")

PSEUDOCODE_BY_METHOD: Dict[str, List[str]] = {
    "dfs": DFS_PSEUDOCODE,
    "bfs": BFS_PSEUDOCODE,
}


def traverse(adjacency: Mapping[str, Sequence[str]], start_node: str, method: str = "dfs") -> StepLog:
    if start_node not in adjacency:
        raise ValueError(f"Unknown start node: {start_node}")
    if method == "dfs":
        return dfs(adjacency, start_node)
    if method == "bfs":
        return bfs(adjacency, start_node)
    raise ValueError(f"Unknown traversal method: {method}")
