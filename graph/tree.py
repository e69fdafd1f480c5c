"""
tree.py — Recursion / Partition Trees
======================================
Recursive algorithms (merge sort, quick sort, fibonacci) give every call a
stable path id: the root is "0", the first recursive branch of node `x`
is `x.0` and the second is `x.1`.  Step logs refer to calls by that id;
the trees built here are the static layout those ids point into.

The builders mirror the splitting rule of the matching algorithm, so the
same input always yields the same tree with the same ids.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional


@dataclass
class TreeNode:
    """
    Attributes:
        id        : Path id ("0", "0.1", …).
        start/end : Inclusive index range of the sub-array (sort trees).
        value     : Argument of the call (fibonacci trees).
        parent_id : Id of the parent call, None at the root.
        children  : Child calls in call order.
    """

    id:        str
    start:     int                = 0
    end:       int                = -1
    value:     Optional[int]      = None
    parent_id: Optional[str]      = None
    children:  List["TreeNode"]   = field(default_factory=list)

    @property
    def size(self) -> int:
        return max(self.end - self.start + 1, 0)

    def walk(self) -> Iterator["TreeNode"]:
        """Preorder traversal."""
        yield self
        for child in self.children:
            yield from child.walk()

    def ids(self) -> List[str]:
        return [n.id for n in self.walk()]

    def find(self, node_id: str) -> Optional["TreeNode"]:
        for n in self.walk():
            if n.id == node_id:
                return n
        return None

    def index(self) -> Dict[str, "TreeNode"]:
        return {n.id: n for n in self.walk()}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id":        self.id,
            "start":     self.start,
            "end":       self.end,
            "value":     self.value,
            "parent_id": self.parent_id,
            "children":  [c.to_dict() for c in self.children],
        }


def child_id(node_id: str, branch: int) -> str:
    return f"{node_id}.{branch}"


def build_merge_sort_tree(start: int, end: int, node_id: str = "0", parent_id: Optional[str] = None) -> TreeNode:
    """Split [start, end] at floor((start + end) / 2) until single elements remain."""
    node = TreeNode(id=node_id, start=start, end=end, parent_id=parent_id)
    if start >= end:
        return node
    middle = (start + end) // 2
    node.children = [
        build_merge_sort_tree(start, middle, child_id(node_id, 0), node_id),
        build_merge_sort_tree(middle + 1, end, child_id(node_id, 1), node_id),
    ]
    return node


def build_fibonacci_tree(n: int, node_id: str = "0", parent_id: Optional[str] = None) -> TreeNode:
    """Call tree of naive fib(n): left child fib(n-1), right child fib(n-2)."""
    node = TreeNode(id=node_id, value=n, parent_id=parent_id)
    if n <= 1:
        return node
    node.children = [
        build_fibonacci_tree(n - 1, child_id(node_id, 0), node_id),
        build_fibonacci_tree(n - 2, child_id(node_id, 1), node_id),
    ]
    return node
