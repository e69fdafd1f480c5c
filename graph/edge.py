"""
edge.py — Graph Edge
====================
Connects two nodes.  Traversal graphs are unweighted, so an Edge is just
an ordered (source, target) pair plus a derived id.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - The edge list is stored as generated; direction only matters when the
    Graph derives its adjacency mapping.
"""

from enum import Enum


# ---------------------------------------------------------------------------
# Edge State Enum — visual encoding for the renderer
# ---------------------------------------------------------------------------
class EdgeState(Enum):
    DEFAULT   = "default"     # thin, neutral grey
    EXPLORING = "exploring"   # the edge being examined RIGHT NOW
    TREE      = "tree"        # parent edge of the discovery tree


class Edge:
    """
    Attributes:
        source : ID of the tail node.
        target : ID of the head node.
    """

    __slots__ = ("source", "target")

    def __init__(self, source: str, target: str):
        self.source: str = source
        self.target: str = target

    @property
    def id(self) -> str:
        return f"{self.source}-{self.target}"

    def connects(self, node_a: str, node_b: str, directed: bool = False) -> bool:
        """True if this edge links node_a → node_b (either way when undirected)."""
        if directed:
            return self.source == node_a and self.target == node_b
        return {self.source, self.target} == {node_a, node_b}

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"source": self.source, "target": self.target}

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(source=data["source"], target=data["target"])

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.source} → {self.target})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.source == other.source and self.target == other.target

    def __hash__(self) -> int:
        return hash((self.source, self.target))
