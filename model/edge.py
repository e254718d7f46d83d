"""
edge.py — Graph Edge
====================
Connects two nodes.  Carries a weight and one transient visual flag,
`highlighted`, set while an algorithm is traversing or relaxing it.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
  - Weight is always numeric: unweighted graphs store 1 so the
    shortest-path engines never special-case a missing weight.
  - Undirected graphs keep ONE Edge per unordered pair; `connects`
    matches it from either end.
"""


class Edge:
    """
    Attributes:
        source      : ID of the tail node.
        target      : ID of the head node.
        weight      : Numeric cost (1 when unweighted). May be negative for Bellman-Ford.
        directed    : If False, the edge matches in both directions.
        highlighted : Transient flag for the edge being traversed right now.
    """

    __slots__ = ("source", "target", "weight", "directed", "highlighted")

    def __init__(
        self,
        source: str,
        target: str,
        weight: float = 1,
        directed: bool = False,
    ):
        self.source:      str   = source
        self.target:      str   = target
        self.weight:      float = weight
        self.directed:    bool  = directed
        self.highlighted: bool  = False

    def connects(self, node_a: str, node_b: str) -> bool:
        """True if this edge links node_a → node_b (respects directedness)."""
        if self.source == node_a and self.target == node_b:
            return True
        return not self.directed and self.source == node_b and self.target == node_a

    def __repr__(self) -> str:
        arrow = " → " if self.directed else " ↔ "
        return f"Edge({self.source}{arrow}{self.target}, w={self.weight}, highlighted={self.highlighted})"
