"""
graph.py — Graph Container, Parsers & Generator
===============================================
Single source of truth for the graph.  Algorithms and the renderer
both talk to this object.

Responsibilities:
  1. The Graph Model: `adjacency[node_id] → {neighbour_id: weight}`
     in insertion order (neighbour iteration order is observable).
  2. Node / Edge collections carrying traversal state for rendering.
  3. Traversal-state helpers the engines call between steps.
  4. Import from adjacency-list / matrix text      (text → graph)
  5. Random connected graph generation
  6. Snapshot of the whole thing for publishing.

Design decisions:
  - Weights are always numeric: 1 when the graph is unweighted.
  - Undirected graphs are stored symmetric.  The parsers enforce this
    (adding missing reverse entries, rejecting conflicting weights);
    the engines never re-check it.
  - Undirected graphs keep ONE Edge per unordered pair.
"""

import math
import random
import re
from typing import Dict, Iterable, List, Optional, Tuple

from errors import InputFormatError
from model.edge import Edge
from model.node import Node
from model.snapshot import EdgeView, GraphSnapshot, NodeView


class GraphFormatError(InputFormatError):
    """Adjacency-list / matrix text could not be parsed."""


# "B" or "B(3)" / "B(-2.5)"
_NEIGHBOUR_RE = re.compile(r"^([^\s(),:]+)(?:\(\s*([-+]?\d+(?:\.\d+)?)\s*\))?$")


class Graph:
    """
    Attributes:
        adjacency       : {node_id: {neighbour_id: weight}}
        nodes           : {node_id: Node}
        edges           : [Edge, …]
        directed        : bool – graph-level directedness
        weighted        : bool – whether weights came from the input
        traversal_order : node ids in visit order for the current run
        negative_cycle  : set by Bellman-Ford when it finds one
    """

    def __init__(self, directed: bool = False, weighted: bool = False):
        self.adjacency:       Dict[str, Dict[str, float]] = {}
        self.nodes:           Dict[str, Node]             = {}
        self.edges:           List[Edge]                  = []
        self.directed:        bool                        = directed
        self.weighted:        bool                        = weighted
        self.traversal_order: List[str]                   = []
        self.negative_cycle:  bool                        = False

    # ==================================================================
    # STRUCTURE
    # ==================================================================
    def add_node(self, node_id: str) -> Node:
        if node_id not in self.nodes:
            self.nodes[node_id] = Node(node_id)
            self.adjacency.setdefault(node_id, {})
        return self.nodes[node_id]

    def add_edge(self, source: str, target: str, weight: float = 1) -> Edge:
        """Add (or re-weight) an edge; undirected graphs get the reverse entry too."""
        if not self.weighted:
            weight = 1
        self.add_node(source)
        self.add_node(target)
        if not self.directed:
            reverse = self.adjacency[target].get(source)
            if reverse is not None and reverse != weight:
                raise GraphFormatError(
                    f"undirected edge {source}-{target} has conflicting weights {weight} and {reverse}"
                )
            self.adjacency[target][source] = weight
        self.adjacency[source][target] = weight

        edge = self.get_edge_between(source, target)
        if edge is None:
            edge = Edge(source, target, weight=weight, directed=self.directed)
            self.edges.append(edge)
        edge.weight = weight
        return edge

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge connecting a → b (direction-aware)."""
        for edge in self.edges:
            if edge.connects(a, b):
                return edge
        return None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, float]]:
        """[(neighbour_id, weight)] in insertion order."""
        return list(self.adjacency.get(node_id, {}).items())

    def node_ids(self) -> List[str]:
        return list(self.adjacency.keys())

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def has_negative_edges(self) -> bool:
        return any(w < 0 for nbrs in self.adjacency.values() for w in nbrs.values())

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.nodes

    # ==================================================================
    # TRAVERSAL STATE (engines only)
    # ==================================================================
    def set_current(self, node_id: Optional[str]) -> None:
        for node in self.nodes.values():
            node.current = node.id == node_id

    def mark_visited(self, visited: Iterable[str]) -> None:
        visited = set(visited)
        for node in self.nodes.values():
            node.visited = node.id in visited

    def mark_queued(self, queue: Iterable[str]) -> None:
        queued = set(queue)
        for node in self.nodes.values():
            node.in_queue = node.id in queued

    def set_distances(self, distances: Dict[str, float]) -> None:
        for node in self.nodes.values():
            node.distance = distances.get(node.id, math.inf)

    def highlight(self, a: str, b: str) -> None:
        """Highlight the edge a → b, and only that edge."""
        for edge in self.edges:
            edge.highlighted = edge.connects(a, b)

    def clear_highlights(self) -> None:
        for edge in self.edges:
            edge.highlighted = False

    def record_visit(self, node_id: str) -> None:
        if node_id not in self.traversal_order:
            self.traversal_order.append(node_id)

    def reset_algo_state(self) -> None:
        """Keep structure, wipe everything a run wrote."""
        for node in self.nodes.values():
            node.reset_algo_state()
        self.clear_highlights()
        self.traversal_order = []
        self.negative_cycle  = False

    # ==================================================================
    # SNAPSHOT
    # ==================================================================
    def snapshot(self, step_number: int = 0, explanation: str = "", run_id: int = 0) -> GraphSnapshot:
        distances = {
            n.id: n.distance for n in self.nodes.values() if n.distance is not None
        }
        return GraphSnapshot(
            step_number=step_number,
            nodes=tuple(
                NodeView(n.id, n.x, n.y, n.visited, n.current, n.in_queue, n.distance)
                for n in self.nodes.values()
            ),
            edges=tuple(
                EdgeView(e.source, e.target, e.weight, e.directed, e.highlighted)
                for e in self.edges
            ),
            traversal_order=tuple(self.traversal_order),
            distances=distances,
            negative_cycle=self.negative_cycle,
            weighted=self.weighted,
            explanation=explanation,
            run_id=run_id,
        )

    # ==================================================================
    # LAYOUT
    # ==================================================================
    def layout_circle(self, cx: float = 400, cy: float = 300, radius: float = 200) -> None:
        """Place nodes evenly on a circle, in node order."""
        n = len(self.nodes)
        for i, node in enumerate(self.nodes.values()):
            angle = 2 * math.pi * i / n
            node.x = cx + radius * math.cos(angle)
            node.y = cy + radius * math.sin(angle)

    # ==================================================================
    # FACTORIES
    # ==================================================================
    @classmethod
    def from_mapping(
        cls,
        mapping: Dict[str, Dict[str, float]],
        directed: bool = False,
        weighted: bool = False,
    ) -> "Graph":
        """
        Build from a plain `{node: {neighbour: weight}}` mapping.

        Listed neighbour order is kept; for undirected graphs the missing
        reverse entries are appended after the listed ones.
        """
        g = cls(directed=directed, weighted=weighted)
        for src in mapping:
            g.add_node(src)
        for src, nbrs in mapping.items():
            for nbr, w in nbrs.items():
                g.add_node(nbr)
                g.adjacency[src][nbr] = w if weighted else 1
        for src, nbrs in list(g.adjacency.items()):
            for nbr, w in list(nbrs.items()):
                g.add_edge(src, nbr, w)
        g.layout_circle()
        return g

    # ---------- Import from Adjacency List (text) ----------
    @classmethod
    def from_adjacency_list(
        cls,
        text: str,
        directed: bool = False,
        weighted: bool = False,
    ) -> "Graph":
        """
        Parse a text adjacency list, one node per line:

            A: B, C          → A connects to B and C (weight 1)
            A: B(3), C(-2)   → weighted; weights used only when `weighted`
            D:               → node with no outgoing edges

        Blank lines are skipped.  Every other line must split on ':'
        into exactly two parts.
        """
        mapping: Dict[str, Dict[str, float]] = {}

        for lineno, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line:
                continue

            parts = line.split(":")
            if len(parts) != 2:
                raise GraphFormatError("expected 'Node: neighbour, neighbour(weight), …'", line=lineno)

            src = parts[0].strip()
            if not src:
                raise GraphFormatError("missing node id before ':'", line=lineno)
            targets = mapping.setdefault(src, {})

            for token in parts[1].split(","):
                token = token.strip()
                if not token:
                    continue
                match = _NEIGHBOUR_RE.match(token)
                if match is None:
                    raise GraphFormatError(f"bad neighbour {token!r}", line=lineno)
                nbr, w_str = match.groups()
                targets[nbr] = _number(w_str) if (weighted and w_str) else 1

        if not mapping:
            raise GraphFormatError("no nodes found")
        return cls.from_mapping(mapping, directed=directed, weighted=weighted)

    # ---------- Import from Adjacency Matrix (text) ----------
    @classmethod
    def from_adjacency_matrix(
        cls,
        text: str,
        directed: bool = False,
        weighted: bool = False,
    ) -> "Graph":
        """
        Parse a comma- or whitespace-separated adjacency matrix whose
        first row holds the node labels:

            A, B, C
            0, 4, 0
            4, 0, 8
            0, 8, 0

        Positive cells are edges (weight = cell when `weighted`).
        """
        rows = [r.strip() for r in text.strip().splitlines() if r.strip()]
        if not rows:
            raise GraphFormatError("empty matrix")

        labels = _split_cells(rows[0])
        if any(not label for label in labels) or len(set(labels)) != len(labels):
            raise GraphFormatError("header must list distinct node labels", line=1)
        if len(rows) - 1 != len(labels):
            raise GraphFormatError(f"expected {len(labels)} matrix rows, got {len(rows) - 1}")

        mapping: Dict[str, Dict[str, float]] = {label: {} for label in labels}
        for i, row in enumerate(rows[1:]):
            lineno = i + 2
            cells = _split_cells(row)
            if len(cells) != len(labels):
                raise GraphFormatError(
                    f"expected {len(labels)} columns, got {len(cells)}", line=lineno
                )
            for j, cell in enumerate(cells):
                try:
                    value = _number(cell)
                except ValueError:
                    raise GraphFormatError(f"not a number: {cell!r}", line=lineno) from None
                if value > 0:
                    mapping[labels[i]][labels[j]] = value if weighted else 1

        return cls.from_mapping(mapping, directed=directed, weighted=weighted)

    # ---------- Random Graph ----------
    @classmethod
    def generate_random(
        cls,
        num_nodes: int = 6,
        directed: bool = False,
        weighted: bool = False,
        seed: Optional[int] = None,
    ) -> "Graph":
        """
        Connected random graph with nodes labelled A, B, C, …

        A cycle through every node guarantees connectivity; on top of it
        `count + randint(0, count·(count-1)/4)` attempts add extra
        non-duplicate edges.
        """
        if not 1 <= num_nodes <= 26:
            raise ValueError("num_nodes must be between 1 and 26")
        rng = random.Random(seed)
        labels = [chr(ord("A") + i) for i in range(num_nodes)]
        mapping: Dict[str, Dict[str, float]] = {label: {} for label in labels}

        def connect(a: str, b: str, w: float) -> None:
            mapping[a][b] = w
            if not directed:
                mapping[b][a] = w

        # backbone cycle
        for i, src in enumerate(labels):
            tgt = labels[(i + 1) % num_nodes]
            if tgt == src:
                continue
            connect(src, tgt, rng.randint(1, 5) if weighted else 1)

        # extra edges up to ~25% density
        max_extra = num_nodes * (num_nodes - 1) // 4
        attempts = rng.randint(0, max(max_extra - 1, 0)) + num_nodes
        for _ in range(attempts):
            src = rng.choice(labels)
            free = [t for t in labels if t != src and t not in mapping[src]]
            if not free:
                continue
            connect(src, rng.choice(free), rng.randint(1, 10) if weighted else 1)

        return cls.from_mapping(mapping, directed=directed, weighted=weighted)

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _number(text: str) -> float:
    value = float(text)
    return int(value) if value.is_integer() else value


def _split_cells(row: str) -> List[str]:
    if "," in row:
        return [c.strip() for c in row.split(",")]
    return row.split()
