"""
node.py — Graph Node
====================
One vertex of the graph plus the traversal state the renderer colours.

Design decisions:
  - `x` / `y` belong to the layout, not the engines.  They are assigned
    once by `Graph.layout_circle` and never touched during a run.
  - `distance` is `None` for algorithms that don't track distances and
    `math.inf` for "unreached" in the weighted algorithms.
"""

from typing import Optional


class Node:
    """
    Attributes:
        id       : Unique label, e.g. "A".
        x, y     : Canvas coordinates (layout only).
        visited  : Fully processed by the current run.
        current  : The node being expanded RIGHT NOW.
        in_queue : Waiting in the BFS queue.
        distance : Tentative distance (weighted algorithms only).
    """

    __slots__ = ("id", "x", "y", "visited", "current", "in_queue", "distance")

    def __init__(self, node_id: str, x: float = 0.0, y: float = 0.0):
        self.id:       str             = node_id
        self.x:        float           = x
        self.y:        float           = y
        self.visited:  bool            = False
        self.current:  bool            = False
        self.in_queue: bool            = False
        self.distance: Optional[float] = None

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------
    def reset_algo_state(self) -> None:
        """Wipe traversal state back to defaults — called between runs."""
        self.visited  = False
        self.current  = False
        self.in_queue = False
        self.distance = None

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        flags = [name for name in ("visited", "current", "in_queue") if getattr(self, name)]
        return f"Node(id={self.id}, flags={flags}, distance={self.distance})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
