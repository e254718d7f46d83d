"""
snapshot.py — Published Snapshots
=================================
A snapshot is a frozen-in-time picture of everything a renderer needs
to draw one frame.  The engines mutate the models in place; the Snapshot
Store copies them into these frozen dataclasses at every publish.

Design decisions:
  - Every container is a tuple (or a read-only mapping) so nothing a
    renderer holds can change underneath it.
  - `step_number` is assigned by the store, strictly increasing per run.
  - `to_dict` produces JSON-safe output: `math.inf` becomes None.
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class Bar:
    value:    float
    compared: bool = False
    swapped:  bool = False
    sorted:   bool = False

    def to_dict(self) -> dict:
        return {
            "value":    self.value,
            "compared": self.compared,
            "swapped":  self.swapped,
            "sorted":   self.sorted,
        }


@dataclass(frozen=True)
class ArraySnapshot:
    """
    Attributes:
        step_number : 0-based publish counter within the run.
        bars        : One Bar per element, in array order.
        explanation : Human-readable note on what just happened.
        run_id      : Token run id that published this (0 = idle publish).
    """

    step_number: int              = 0
    bars:        Tuple[Bar, ...]  = ()
    explanation: str              = ""
    run_id:      int              = 0

    kind = "array"

    @property
    def values(self) -> Tuple[float, ...]:
        return tuple(b.value for b in self.bars)

    def to_dict(self) -> dict:
        return {
            "kind":        self.kind,
            "step_number": self.step_number,
            "bars":        [b.to_dict() for b in self.bars],
            "explanation": self.explanation,
            "run_id":      self.run_id,
        }


@dataclass(frozen=True)
class NodeView:
    id:       str
    x:        float           = 0.0
    y:        float           = 0.0
    visited:  bool            = False
    current:  bool            = False
    in_queue: bool            = False
    distance: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "id":       self.id,
            "x":        self.x,
            "y":        self.y,
            "visited":  self.visited,
            "current":  self.current,
            "in_queue": self.in_queue,
            "distance": _json_distance(self.distance),
        }


@dataclass(frozen=True)
class EdgeView:
    source:      str
    target:      str
    weight:      float = 1
    directed:    bool  = False
    highlighted: bool  = False

    def to_dict(self) -> dict:
        return {
            "source":      self.source,
            "target":      self.target,
            "weight":      self.weight,
            "directed":    self.directed,
            "highlighted": self.highlighted,
        }


@dataclass(frozen=True)
class GraphSnapshot:
    """
    Attributes:
        step_number     : 0-based publish counter within the run.
        nodes / edges   : Frozen views of every node and edge.
        traversal_order : Node ids in the order the algorithm visited them.
        distances       : {node_id: distance} for the weighted algorithms.
        negative_cycle  : True once Bellman-Ford has detected a negative cycle.
        weighted        : Whether the renderer should draw weight labels.
        explanation     : Human-readable note on what just happened.
        run_id          : Token run id that published this (0 = idle publish).
    """

    step_number:     int                   = 0
    nodes:           Tuple[NodeView, ...]  = ()
    edges:           Tuple[EdgeView, ...]  = ()
    traversal_order: Tuple[str, ...]       = ()
    distances:       Mapping[str, float]   = field(default_factory=dict)
    negative_cycle:  bool                  = False
    weighted:        bool                  = False
    explanation:     str                   = ""
    run_id:          int                   = 0

    kind = "graph"

    def __post_init__(self):
        object.__setattr__(self, "distances", MappingProxyType(dict(self.distances)))

    def node(self, node_id: str) -> Optional[NodeView]:
        for view in self.nodes:
            if view.id == node_id:
                return view
        return None

    def to_dict(self) -> dict:
        return {
            "kind":            self.kind,
            "step_number":     self.step_number,
            "nodes":           [n.to_dict() for n in self.nodes],
            "edges":           [e.to_dict() for e in self.edges],
            "traversal_order": list(self.traversal_order),
            "distances":       {k: _json_distance(v) for k, v in self.distances.items()},
            "negative_cycle":  self.negative_cycle,
            "weighted":        self.weighted,
            "explanation":     self.explanation,
            "run_id":          self.run_id,
        }


def _json_distance(value: Optional[float]) -> Optional[float]:
    if value is None or math.isinf(value):
        return None
    return value
