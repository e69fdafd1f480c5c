"""
graph/
-----
Structure layer.  Public API:

    from graph import Graph, Node, Edge
    from graph import NodeState, EdgeState
    from graph import TreeNode, build_merge_sort_tree, build_fibonacci_tree
"""

from graph.node  import Node,  NodeState
from graph.edge  import Edge,  EdgeState
from graph.graph import Graph
from graph.tree  import TreeNode, build_merge_sort_tree, build_fibonacci_tree, child_id

__all__ = [
    "Node",      "NodeState",
    "Edge",      "EdgeState",
    "Graph",
    "TreeNode",
    "build_merge_sort_tree",
    "build_fibonacci_tree",
    "child_id",
]
