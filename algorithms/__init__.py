"""
algorithms/__init__.py — Algorithm Registry
===========================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bubble": AlgoInfo(key, label, fn, kind="array", …),
        "bfs":    AlgoInfo(key, label, fn, kind="graph", …),
        …
    }

Array algorithms are called as   fn(model: ArrayModel, token)
Graph algorithms are called as   fn(graph: Graph, start: str, token)
and both return a Step generator.  Adding an algorithm is: write the
generator, add one entry here.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from algorithms.step           import Step, Outcome
from algorithms.bubble_sort    import bubble_sort    as _bubble
from algorithms.selection_sort import selection_sort as _selection
from algorithms.insertion_sort import insertion_sort as _insertion
from algorithms.merge_sort     import merge_sort     as _merge
from algorithms.quick_sort     import quick_sort     as _quick
from algorithms.bfs            import bfs            as _bfs
from algorithms.dfs            import dfs            as _dfs
from algorithms.dijkstra       import dijkstra       as _dijkstra
from algorithms.bellman_ford   import bellman_ford   as _bf


ARRAY = "array"
GRAPH = "graph"


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "bfs"
    label:             str                    # human label, e.g. "Breadth-First Search"
    fn:                Callable               # the generator function
    kind:              str                    # ARRAY or GRAPH
    tags:              List[str] = field(default_factory=list)
    supports_negative: bool     = False       # can handle negative edges?
    complexity_time:   str      = ""
    complexity_space:  str      = ""
    description:       str      = ""

    def to_dict(self) -> dict:
        return {
            "key":               self.key,
            "label":             self.label,
            "kind":              self.kind,
            "tags":              list(self.tags),
            "supports_negative": self.supports_negative,
            "complexity_time":   self.complexity_time,
            "complexity_space":  self.complexity_space,
            "description":       self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort", fn=_bubble, kind=ARRAY,
        tags=["comparison", "stable", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Swaps adjacent out-of-order pairs until nothing moves.",
    ),

    "selection": AlgoInfo(
        key="selection", label="Selection Sort", fn=_selection, kind=ARRAY,
        tags=["comparison", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Finds the minimum of the unsorted part and moves it to the front.",
    ),

    "insertion": AlgoInfo(
        key="insertion", label="Insertion Sort", fn=_insertion, kind=ARRAY,
        tags=["comparison", "stable", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Grows a sorted prefix by inserting one key at a time.",
    ),

    "merge": AlgoInfo(
        key="merge", label="Merge Sort", fn=_merge, kind=ARRAY,
        tags=["comparison", "stable", "divide-and-conquer"],
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Splits in halves, sorts each, merges them back together.",
    ),

    "quick": AlgoInfo(
        key="quick", label="Quick Sort", fn=_quick, kind=ARRAY,
        tags=["comparison", "in-place", "divide-and-conquer"],
        complexity_time="O(n log n) avg", complexity_space="O(log n)",
        description="Partitions around the last element, then sorts each side.",
    ),

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs, kind=GRAPH,
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer-by-layer from the start node.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=_dfs, kind=GRAPH,
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra, kind=GRAPH,
        tags=["weighted", "shortest-path"],
        complexity_time="O(V²)", complexity_space="O(V)",
        description="Greedily finalises the closest node. Needs non-negative weights.",
    ),

    "bellman-ford": AlgoInfo(
        key="bellman-ford", label="Bellman–Ford", fn=_bf, kind=GRAPH,
        tags=["weighted", "shortest-path", "negative-edges"],
        supports_negative=True,
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Handles negative edges. Detects negative cycles.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms(kind: Optional[str] = None) -> List[AlgoInfo]:
    """Return registered algorithms in insertion order, optionally of one kind."""
    return [a for a in REGISTRY.values() if kind is None or a.kind == kind]


__all__ = [
    "ARRAY",
    "GRAPH",
    "AlgoInfo",
    "REGISTRY",
    "Step",
    "Outcome",
    "get_algorithm",
    "list_algorithms",
]
