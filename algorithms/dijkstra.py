"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
================================================
Array-scan Dijkstra: every round picks the unvisited node with the
smallest finite tentative distance (first encountered in node order
wins ties), finalises it and relaxes its outgoing edges.

Yields a Step at:
  1. Node selected  →  CURRENT + VISITED, recorded in the order
  2. Successful relaxation  →  distance updated, edge highlighted
  3. Node finished  →  clear CURRENT and the highlight

Stops early once no unvisited node has a finite distance; whatever is
left is unreachable from the start node.

Correctness note: Dijkstra requires non-negative weights.  The run
controller refuses to start it on a graph with negative edges.
"""

import math
from typing import TYPE_CHECKING, Dict, Generator, Optional, Set

from model import Graph
from algorithms.step import Step

if TYPE_CHECKING:
    from engine.token import CancellationToken


def dijkstra(graph: Graph, start: str, token: "CancellationToken") -> Generator[Step, None, None]:
    dist:      Dict[str, float]   = {nid: math.inf for nid in graph.node_ids()}
    dist[start] = 0
    unvisited: Dict[str, None]    = dict.fromkeys(graph.node_ids())   # ordered set
    visited:   Set[str]           = set()

    graph.set_distances(dist)
    yield Step(pause=False, explanation=f"All distances = ∞ except '{start}' = 0.")

    while unvisited:
        if not token.is_active:
            return

        current = _closest(unvisited, dist)
        if current is None:
            break

        # -- select --
        del unvisited[current]
        visited.add(current)
        graph.record_visit(current)
        graph.set_current(current)
        graph.mark_visited(visited)
        graph.set_distances(dist)
        yield Step(explanation=f"'{current}' has the smallest distance ({dist[current]}) — finalise it.")

        # -- relax --
        for nbr, weight in graph.neighbours(current):
            if nbr in visited:
                continue
            new_dist = dist[current] + weight
            if new_dist < dist.get(nbr, math.inf):
                if not token.is_active:
                    return
                dist[nbr] = new_dist
                graph.highlight(current, nbr)
                graph.set_distances(dist)
                yield Step(explanation=f"Relax {current}→{nbr}: distance becomes {new_dist}.")

        graph.set_current(None)
        graph.clear_highlights()
        yield Step(pause=False)


def _closest(unvisited: Dict[str, None], dist: Dict[str, float]) -> Optional[str]:
    best, best_dist = None, math.inf
    for nid in unvisited:
        if dist[nid] < best_dist:
            best, best_dist = nid, dist[nid]
    return best
