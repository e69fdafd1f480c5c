"""
graph.py — Graph Container & Generator
=======================================
Single source of truth for a traversal graph.  The traversal algorithms
only ever see `graph.adjacency`; the renderer reads nodes and edges.

Responsibilities:
  1. Building nodes & edges                 (add / create / lookup)
  2. Adjacency queries                      (neighbours, adjacency, …)
  3. Graph-generation factory methods       (default, tree, grid, random)
  4. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes stored in a dict keyed by id, edges in insertion order.
  - The adjacency dict `_adj[node_id] → [neighbour_id, …]` is maintained
    incrementally and kept sorted ascending, so traversal order never
    depends on the order edges were inserted.
  - `directed` is a graph-level flag.  Generated graphs are directed
    (source → target) by default; pass directed=False to also walk
    every edge backwards.
"""

import bisect
import random
from typing import Dict, List, Optional, Tuple

import config
from graph.node import Node
from graph.edge import Edge


class Graph:
    """
    Attributes:
        nodes    : {node_id: Node}
        edges    : [Edge, …] in insertion order
        directed : bool – graph-level directedness
        _adj     : {node_id: [neighbour_id, …]} sorted ascending
    """

    def __init__(self, directed: bool = True):
        self.nodes:    Dict[str, Node]      = {}
        self.edges:    List[Edge]           = []
        self.directed: bool                 = directed
        self._adj:     Dict[str, List[str]] = {}

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        if node.id in self.nodes:
            raise ValueError(f"Duplicate node id: {node.id}")
        self.nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        return node

    def create_node(self, node_id: str, x: float, y: float, label: Optional[str] = None) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(node_id=node_id, x=x, y=y, label=label))

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        for endpoint in (edge.source, edge.target):
            if endpoint not in self.nodes:
                raise ValueError(f"Edge {edge.id} references unknown node '{endpoint}'")
        self.edges.append(edge)
        self._link(edge.source, edge.target)
        if not self.directed:
            self._link(edge.target, edge.source)
        return edge

    def create_edge(self, source: str, target: str) -> Edge:
        return self.add_edge(Edge(source=source, target=target))

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge connecting a and b (direction-aware)."""
        for e in self.edges:
            if e.connects(a, b, directed=self.directed):
                return e
        return None

    def _link(self, a: str, b: str) -> None:
        nbrs = self._adj.setdefault(a, [])
        if b not in nbrs:
            bisect.insort(nbrs, b)

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[str]:
        """Neighbour ids of node_id, ascending."""
        return list(self._adj.get(node_id, []))

    @property
    def adjacency(self) -> Dict[str, List[str]]:
        """Fresh copy of the full adjacency mapping."""
        return {nid: list(nbrs) for nid, nbrs in self._adj.items()}

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed":  self.directed,
            "nodes":     [n.to_dict() for n in self.nodes.values()],
            "edges":     [e.to_dict() for e in self.edges],
            "adjacency": self.adjacency,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls(directed=data.get("directed", True))
        for nd in data.get("nodes", []):
            g.add_node(Node.from_dict(nd))
        for ed in data.get("edges", []):
            g.add_edge(Edge.from_dict(ed))
        return g

    # ==================================================================
    # GENERATORS — Factory class-methods
    # ==================================================================
    @classmethod
    def generate(cls, graph_type: str = config.DEFAULT_GRAPH_TYPE, seed: Optional[int] = None, directed: bool = True) -> "Graph":
        """Build one of the named graph layouts."""
        if graph_type == "default":
            return cls.generate_default(directed=directed)
        if graph_type == "tree":
            return cls.generate_tree(directed=directed)
        if graph_type == "grid":
            return cls.generate_grid(directed=directed)
        if graph_type == "random":
            return cls.generate_random(seed=seed, directed=directed)
        raise ValueError(f"Unknown graph type: {graph_type} (one of {', '.join(config.GRAPH_TYPES)})")

    # ---------- Default (small binary tree) ----------
    @classmethod
    def generate_default(cls, directed: bool = True) -> "Graph":
        g = cls(directed=directed)
        layout = [
            ("A", 300, 50), ("B", 150, 150), ("C", 450, 150),
            ("D", 75, 250), ("E", 225, 250), ("F", 375, 250), ("G", 525, 250),
        ]
        for nid, x, y in layout:
            g.create_node(nid, x, y)
        for src, tgt in [("A", "B"), ("A", "C"), ("B", "D"), ("B", "E"), ("C", "F"), ("C", "G")]:
            g.create_edge(src, tgt)
        return g

    # ---------- Complete binary tree, 4 levels ----------
    @classmethod
    def generate_tree(cls, levels: int = 4, directed: bool = True) -> "Graph":
        """
        Complete binary tree with ids assigned in preorder (A, B, C, …).
        Each level halves the horizontal spread of the one above it.
        """
        g = cls(directed=directed)
        max_nodes = 2 ** levels - 1
        counter = [0]
        level_h = (config.CANVAS_HEIGHT - config.PADDING * 2) / (levels - 1)

        def build(parent: Optional[str], level: int, x: float, y: float, x_offset: float):
            if level >= levels or counter[0] >= max_nodes:
                return
            nid = _letter_id(counter[0])
            counter[0] += 1
            g.create_node(nid, x, y)
            if parent is not None:
                g.create_edge(parent, nid)
            half = x_offset / 2
            build(nid, level + 1, x - half, y + level_h, half)
            build(nid, level + 1, x + half, y + level_h, half)

        build(None, 0, config.CANVAS_WIDTH / 2 + config.PADDING, config.PADDING + 20, config.CANVAS_WIDTH / 2)
        return g

    # ---------- Grid ----------
    @classmethod
    def generate_grid(cls, rows: int = 4, cols: int = 5, directed: bool = True) -> "Graph":
        """Row-major grid; every cell links to its right and lower neighbour."""
        g = cls(directed=directed)
        pad = config.PADDING
        x_step = (config.CANVAS_WIDTH - pad * 4) / max(cols - 1, 1)
        y_step = (config.CANVAS_HEIGHT - pad * 4) / max(rows - 1, 1)

        def nid(r, c):
            return _letter_id(r * cols + c)

        for r in range(rows):
            for c in range(cols):
                g.create_node(nid(r, c), c * x_step + pad * 2, r * y_step + pad * 2)

        for r in range(rows):
            for c in range(cols):
                if c < cols - 1:
                    g.create_edge(nid(r, c), nid(r, c + 1))
                if r < rows - 1:
                    g.create_edge(nid(r, c), nid(r + 1, c))
        return g

    # ---------- Random ----------
    @classmethod
    def generate_random(
        cls,
        num_nodes: int = 12,
        seed: Optional[int] = None,
        directed: bool = True,
    ) -> "Graph":
        """
        Random positions, a shuffled backbone chain through every node, then
        num_nodes // 2 attempts at an extra edge between two random nodes
        (skipped for self-loops and for pairs already linked either way).
        Without a seed, two calls give two different graphs.
        """
        rng = random.Random(seed)
        g = cls(directed=directed)
        pad = config.PADDING

        ids = [_letter_id(i) for i in range(num_nodes)]
        for nid in ids:
            x = rng.random() * (config.CANVAS_WIDTH - pad * 2) + pad
            y = rng.random() * (config.CANVAS_HEIGHT - pad * 2) + pad
            g.create_node(nid, round(x, 2), round(y, 2))

        chain = list(ids)
        rng.shuffle(chain)
        pairs: List[Tuple[str, str]] = list(zip(chain, chain[1:]))
        for src, tgt in pairs:
            g.create_edge(src, tgt)

        for _ in range(num_nodes // 2):
            a, b = rng.choice(ids), rng.choice(ids)
            if a == b or any(e.connects(a, b) for e in g.edges):
                continue
            g.create_edge(a, b)

        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"


def _letter_id(i: int) -> str:
    return chr(ord("A") + i)
