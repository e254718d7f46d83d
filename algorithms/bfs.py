"""
bfs.py — Breadth-First Search
=============================
Generator-based BFS.  Yields a Step at every meaningful event:
  1. Dequeue a node  →  mark it CURRENT + VISITED, record it in the order
  2. Enqueue an unseen neighbour  →  mark it IN_QUEUE, highlight the edge
  3. Node finished  →  clear CURRENT and the edge highlight

Rules:
  - A node is visited at dequeue time, not at enqueue time.
  - A neighbour is enqueued only if it is neither visited nor already
    waiting in the queue, so the queue never holds duplicates.
  - Neighbours are examined in the graph's insertion order.
"""

from collections import deque
from typing import TYPE_CHECKING, Deque, Generator, Set

from model import Graph
from algorithms.step import Step

if TYPE_CHECKING:
    from engine.token import CancellationToken


def bfs(graph: Graph, start: str, token: "CancellationToken") -> Generator[Step, None, None]:
    queue:   Deque[str] = deque([start])
    visited: Set[str]   = set()

    while queue:
        if not token.is_active:
            return

        current = queue.popleft()
        if current in visited:
            continue

        # -- dequeue event --
        visited.add(current)
        graph.record_visit(current)
        graph.set_current(current)
        graph.mark_visited(visited)
        graph.mark_queued(queue)
        yield Step(explanation=f"Dequeue '{current}' — FIFO, the earliest discovered node.")

        # -- explore neighbours --
        for nbr, _ in graph.neighbours(current):
            if nbr in visited or nbr in queue:
                continue
            if not token.is_active:
                return
            queue.append(nbr)
            graph.nodes[nbr].in_queue = True
            graph.highlight(current, nbr)
            yield Step(explanation=f"Enqueue '{nbr}' via edge {current}→{nbr}.")

        # -- node finished --
        graph.set_current(None)
        graph.mark_visited(visited)
        graph.mark_queued(queue)
        graph.clear_highlights()
        yield Step(pause=False)
