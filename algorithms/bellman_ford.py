"""
bellman_ford.py — Bellman–Ford Algorithm
========================================
The only single-source shortest-path algorithm here that handles
NEGATIVE edge weights (but not negative cycles).

Structure:
  • Up to |V|-1 rounds.  Each round walks the nodes in order and relaxes
    every outgoing edge of every reached node.  A round with no
    relaxation ends the rounds early — nothing can improve any more.
  • One detector pass over all edges.  If any edge would still relax,
    the graph has a negative cycle and the run ends with
    Outcome.NEGATIVE_CYCLE instead of a distance table.

Each source node is recorded in the traversal order once, the first
time a round reaches it.
"""

import math
from typing import TYPE_CHECKING, Dict, Generator, Optional

from model import Graph
from algorithms.step import Step, Outcome

if TYPE_CHECKING:
    from engine.token import CancellationToken


def bellman_ford(
    graph: Graph,
    start: str,
    token: "CancellationToken",
) -> Generator[Step, None, Optional[Outcome]]:
    node_ids = graph.node_ids()
    dist: Dict[str, float] = {nid: math.inf for nid in node_ids}
    dist[start] = 0

    graph.set_distances(dist)
    yield Step(pause=False, explanation=f"All distances = ∞ except '{start}' = 0.")

    # ==============================================================
    # MAIN ROUNDS
    # ==============================================================
    for round_idx in range(1, len(node_ids)):
        if not token.is_active:
            return None
        relaxed = False

        for u in node_ids:
            if not token.is_active:
                return None

            graph.record_visit(u)
            graph.set_current(u)
            graph.set_distances(dist)
            graph.mark_visited(nid for nid in node_ids if not math.isinf(dist[nid]))
            yield Step(explanation=f"Round {round_idx}: relax the edges out of '{u}'.")

            if not math.isinf(dist[u]):
                for v, w in graph.neighbours(u):
                    new_dist = dist[u] + w
                    if new_dist < dist.get(v, math.inf):
                        if not token.is_active:
                            return None
                        dist[v] = new_dist
                        relaxed = True
                        graph.highlight(u, v)
                        graph.set_distances(dist)
                        graph.mark_visited(nid for nid in node_ids if not math.isinf(dist[nid]))
                        yield Step(explanation=f"Relax {u}→{v} (w={w}): distance becomes {new_dist}.")

            graph.set_current(None)
            graph.clear_highlights()
            yield Step(pause=False)

        if not relaxed:
            break

    # ==============================================================
    # NEGATIVE-CYCLE DETECTOR
    # ==============================================================
    for u in node_ids:
        if not token.is_active:
            return None
        if math.isinf(dist[u]):
            continue
        for v, w in graph.neighbours(u):
            if dist[u] + w < dist.get(v, math.inf):
                graph.negative_cycle = True
                graph.highlight(u, v)
                yield Step(
                    pause=False,
                    explanation=f"Edge {u}→{v} still relaxes after |V|-1 rounds — negative cycle!",
                )
                return Outcome.NEGATIVE_CYCLE

    return Outcome.COMPLETED
